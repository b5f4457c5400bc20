from workgraph.cli import main

main()
