from seqdiffpack.cli.app import main

main()
