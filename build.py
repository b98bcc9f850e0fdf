#!/usr/bin/env python3
from pagesmith.cli import main

if __name__ == "__main__":
    main()
