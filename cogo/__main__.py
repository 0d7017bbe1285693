from cogo.cli import main

main()
