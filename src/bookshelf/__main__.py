from bookshelf.main import main

main()
