# SPDX-FileCopyrightText: 2025-present mediawalk contributors
#
# SPDX-License-Identifier: MIT
__version__ = "0.3.0"
