#!/usr/bin/env python3
from chronoblog.cli import main

if __name__ == "__main__":
    main()
