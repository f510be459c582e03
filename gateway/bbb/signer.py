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


from dataclasses import dataclass
from django.conf import settings
from gateway.bbb.utils import filter_parameters, get_checksum
from typing import Any, Dict
from urllib.parse import urlencode
import gateway.bbb.constants as cst


@dataclass(frozen=True)
class GatewayConfig:
    """
    Connection data of one BigBlueButton compatible server.
    """
    server_base_url: str
    api_secret: str
    checksum_algorithm: str = cst.SHA1
    request_timeout: float = 10.0

    def __post_init__(self):
        if self.checksum_algorithm not in cst.SHA_BY_STRING:
            raise ValueError(f"Unsupported checksum algorithm '{self.checksum_algorithm}'")
        object.__setattr__(self, "server_base_url", self.server_base_url.rstrip("/"))

    @classmethod
    def from_settings(cls) -> "GatewayConfig":
        return cls(
            server_base_url=settings.CLASSROOM_BBB_SERVER_URL,
            api_secret=settings.CLASSROOM_BBB_API_SECRET,
            checksum_algorithm=settings.CLASSROOM_BBB_CHECKSUM_ALGORITHM,
            request_timeout=settings.CLASSROOM_BBB_REQUEST_TIMEOUT,
        )


@dataclass(frozen=True)
class SignedUrl:
    url: str
    operation: str
    query_string: str
    checksum: str


class RequestSigner:
    """
    Builds checksum protected API urls.
    The checksum is calculated over the exact query string placed into the url.
    """
    config: GatewayConfig

    def get_query_string(self, parameters: Dict[str, Any]) -> str:
        return urlencode(filter_parameters(parameters), safe=cst.SAFE_QUOTE_SYMBOLS)

    def get_checksum(self, operation: str, query_string: str) -> str:
        algorithm = cst.SHA_BY_STRING[self.config.checksum_algorithm]
        return get_checksum(algorithm(), f"{operation}{query_string}{self.config.api_secret}")

    def sign(self, operation: str, parameters: Dict[str, Any]) -> SignedUrl:
        query_string = self.get_query_string(parameters)
        checksum = self.get_checksum(operation, query_string)
        base = f"{self.config.server_base_url}/api/{operation}"
        if query_string:
            url = f"{base}?{query_string}&checksum={checksum}"
        else:
            url = f"{base}?checksum={checksum}"
        return SignedUrl(url=url, operation=operation, query_string=query_string, checksum=checksum)

    def __init__(self, config: GatewayConfig):
        self.config = config
