from regpick.cli import main

main()
