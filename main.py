#!/usr/bin/env python3
"""
Entry point for the SSH SOCKS keeper when run from a source checkout.
"""

from socks_keeper.main import main

if __name__ == "__main__":
    main()
