# SPDX-License-Identifier: LGPL-3.0-or-later
# winregcli/core/__init__.py
