from asvprep.cli import main

main()
