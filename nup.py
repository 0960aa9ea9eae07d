#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tile the pages of a PDF into an N-up layout.
"""

# local repo modules
import pdf_nup.cli


if __name__ == "__main__":
	raise SystemExit(pdf_nup.cli.main())
