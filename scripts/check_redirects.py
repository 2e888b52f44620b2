#!/usr/bin/env python3
"""
Check a list of domains for notable redirects.

Loads each domain (http:// first, https:// when that fails) in a headless
browser or HTTP client, ignores bare <-> www. redirects, and writes the
remaining ones grouped by destination host.

Usage:
    python scripts/check_redirects.py -l subdomains.txt -o redirects.txt
    python scripts/check_redirects.py -l subdomains.txt --navigator http -c 20
"""

import sys

from redirect_scanner.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
