"""Game Jolt API protocol layer: requests, signing, decoding and dispatch."""

from gamejolt_api.api.client import API_URL as API_URL
from gamejolt_api.api.client import API_VERSION as API_VERSION
from gamejolt_api.api.client import GameJoltClient as GameJoltClient
from gamejolt_api.api.errors import ConstructionError as ConstructionError
from gamejolt_api.api.errors import DecodeError as DecodeError
from gamejolt_api.api.errors import GameJoltError as GameJoltError
from gamejolt_api.api.errors import RequestCancelledError as RequestCancelledError
from gamejolt_api.api.errors import TransportCancelledError as TransportCancelledError
from gamejolt_api.api.errors import TransportError as TransportError
from gamejolt_api.api.listener import HandlerListener as HandlerListener
from gamejolt_api.api.listener import Listener as Listener
from gamejolt_api.api.requests import Endpoint as Endpoint
from gamejolt_api.api.requests import Request as Request
from gamejolt_api.api.transport import HttpxTransport as HttpxTransport
from gamejolt_api.api.values import Value as Value
