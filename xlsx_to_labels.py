#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Convert a product spreadsheet into a printable PDF label sheet.
"""

# local repo modules
import product_label_sheet.cli


if __name__ == "__main__":
	raise SystemExit(product_label_sheet.cli.main())
