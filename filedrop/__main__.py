from filedrop.main import main

main()
