if __name__ == '__main__':
    from gitlanes.graph import *
    from argparse import ArgumentParser

    parser = ArgumentParser(description="GitLanes ASCII graph tool")
    parser.add_argument("definition", help="Graph definition (e.g.: \"m:a,b a:z b:z z\")", nargs="+")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    definition = " ".join(args.definition)
    sequence, heads = GraphDiagram.parseDefinition(definition)
    layout = computeLayout(sequence)

    if args.verbose:
        print("Heads:", ", ".join(sorted(heads)))
        print("Dangling:", ", ".join(sorted(danglingHashes(sequence))) or "-")
        print("Columns:", maxColumns(layout))

    diagram = GraphDiagram.diagram(sequence, layout, verbose=args.verbose)
    print(diagram)
