# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- The single administrator credential and its change-detection fingerprint
- Stateless session tokens carried in the ``session`` cookie
- The error taxonomy shared by login and session validation
"""
