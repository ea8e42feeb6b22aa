# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Upgrade wizards for CMS installations."""

__version__ = "0.1.0"
