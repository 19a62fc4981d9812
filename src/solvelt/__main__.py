from solvelt.cli.app import main

main()
