from klineta.cli import main

main()
