from storegen.cli import main

main()
