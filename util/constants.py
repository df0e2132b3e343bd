# util/constants.py
from typing import Final

# Cloudflare's v4 API caps a namespace listing page at 100 entries.
NAMESPACE_PAGE_SIZE: Final[int] = 100

# Go's http.DetectContentType reads at most this many bytes.
SNIFF_LEN: Final[int] = 512


class ExternalURIs:
    CLOUDFLARE_API = "https://api.cloudflare.com/client/v4"
    KV_NAMESPACES = "/accounts/{account_id}/storage/kv/namespaces"
    KV_VALUE = KV_NAMESPACES + "/{namespace_id}/values/{key}"
