# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""AniShare Admin: single-administrator back office with stateless cookie sessions."""

__version__ = "0.1.0"
