# main.py
import sys

from dijkstra_map.cli import main

if __name__ == "__main__":
    sys.exit(main())
