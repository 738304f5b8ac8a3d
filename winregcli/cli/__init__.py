# SPDX-License-Identifier: LGPL-3.0-or-later
# winregcli/cli/__init__.py
