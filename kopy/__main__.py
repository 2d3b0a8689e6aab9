# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""Allow ``python -m kopy``; delegates to cli.main()."""

import sys

from kopy.cli import main


if __name__ == "__main__":
    sys.exit(main())
