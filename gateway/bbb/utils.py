# EduGate - Classroom Conferencing Gateway
# Copyright (C) 2025 EduGate contributors
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or (at your
# option) any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU Affero General Public License
# for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

# This utils file contains functions without import of gateway files to prevent circular imports

from _hashlib import HASH
from typing import Any, Dict
from django.utils import timezone


def get_checksum(sha: HASH, string: str) -> str:
    sha.update(string.encode())
    return sha.hexdigest()


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def filter_parameters(parameters: Dict[str, Any]) -> Dict[str, str]:
    """
    Drop unset parameters and render the remaining values as strings.
    Insertion order of the mapping is kept.
    """
    return {key: stringify(value) for key, value in parameters.items() if value is not None}


def now_ms() -> int:
    return int(timezone.now().timestamp() * 1000)
