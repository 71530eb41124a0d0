#!/usr/bin/env python

# Copyright (c) 2026, The kconfparse developers
# SPDX-License-Identifier: ISC

"""
Checks the syntax of Kconfig files. Each file is parsed on its own: 'source'
statements are checked, but the files they point to are not read. Pass those
files on the command line too if you want them checked.

Syntax errors and warnings are printed to stderr. The exit status is 0 if
all files parse, and 1 otherwise.
"""
import argparse
import sys

import kconfparse


def main(argv=None):
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=__doc__)

    parser.add_argument(
        "--config-blocks",
        action="store_true",
        help="Accept 'config' and 'menuconfig' blocks at the top level of "
             "files. By default, only 'source' statements are accepted "
             "there.")

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not print warnings")

    parser.add_argument(
        "--print-tree",
        action="store_true",
        help="Print each parsed file back out in Kconfig format")

    parser.add_argument(
        "kconfig_filenames",
        metavar="KCONFIG_FILENAME",
        nargs="+",
        help="Kconfig file to check")

    args = parser.parse_args(argv)

    kparser = kconfparse.Parser(warn=not args.quiet,
                                config_blocks=args.config_blocks)

    all_ok = True
    for filename in args.kconfig_filenames:
        try:
            with open(filename, "rb") as f:
                tree = kparser.parse(f.read(), filename)
        except (OSError, kconfparse.KconfigSyntaxError) as e:
            sys.stderr.write("{}\n".format(e))
            all_ok = False
            continue

        if args.print_tree:
            sys.stdout.write(str(tree))

    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main())
