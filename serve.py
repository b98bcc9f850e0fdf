#!/usr/bin/env python3
from pagesmith.serve import main

if __name__ == "__main__":
    raise SystemExit(main())
