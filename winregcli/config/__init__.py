# SPDX-License-Identifier: LGPL-3.0-or-later
# winregcli/config/__init__.py
