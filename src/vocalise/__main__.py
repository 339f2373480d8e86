from vocalise.cli import main

main()
