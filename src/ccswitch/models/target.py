# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Backend target model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BackendTarget:
    """One named endpoint configuration to be health-checked. Identity is `name`."""

    name: str
    base_url: str
    auth_token: str = ""

    @property
    def token_present(self) -> bool:
        return bool(self.auth_token)
