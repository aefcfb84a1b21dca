"""Request URL construction for the iDEAL XML API"""

from typing import Mapping, Union

import httpx

from ideal_gateway.domain.exceptions import ConfigurationError

ParamValue = Union[str, int, httpx.URL]


class EndpointBuilder:
    """
    Builds absolute GET URLs for iDEAL operations.

    Every URL carries the `a=<operation>` discriminator plus the
    operation-specific parameters. When test mode is on, `testmode=true` is
    added to the base endpoint once and inherited by every request.
    """

    def __init__(self, base_url: str, testmode: bool = False):
        try:
            url = httpx.URL(base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise ConfigurationError(f"Invalid iDEAL endpoint {base_url!r}: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"iDEAL endpoint must be an absolute http(s) URL, got {base_url!r}")

        if testmode:
            url = url.copy_set_param("testmode", "true")

        self.base_url = url
        self.testmode = testmode

    def build(self, operation: str, params: Mapping[str, ParamValue] | None = None) -> str:
        """
        Return the request URL for `operation` with `params` URL-encoded.

        Raises:
            ValueError: If any parameter value is None
        """
        query = {"a": operation}
        for name, value in (params or {}).items():
            query[name] = _render(operation, name, value)
        return str(self.base_url.copy_merge_params(query))


def _render(operation: str, name: str, value: ParamValue) -> str:
    if value is None:
        raise ValueError(f"Missing required parameter {name!r} for operation {operation!r}")
    if isinstance(value, bool):
        return "true" if value else "false"
    # ints in base 10, httpx.URL in canonical form, strings verbatim
    return str(value)
