"""HTTP pipeline: request descriptors, transformers and Listenable."""

from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable, ResponseHandler
from alpaca_client.http.request import (
    HttpMethod,
    RequestBuilder,
    RequestDescriptor,
)
from alpaca_client.http.transformer import (
    GenericTransformer,
    NoContentTransformer,
    Transformer,
    ValueTransformer,
    raise_for_status,
)

__all__ = [
    "GenericTransformer",
    "HttpClient",
    "HttpMethod",
    "Listenable",
    "NoContentTransformer",
    "RequestBuilder",
    "RequestDescriptor",
    "ResponseHandler",
    "Transformer",
    "ValueTransformer",
    "raise_for_status",
]
