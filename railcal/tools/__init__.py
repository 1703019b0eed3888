from railcal.tools.gateway_client import GatewayClient, TrainGateway
from railcal.tools.mock_gateway import MockGateway
from railcal.tools.selection_store import (
    JsonSelectionStore,
    MemorySelectionStore,
    SelectionStore,
)
from railcal.tools.session import SessionProvider, TokenSession

__all__ = [
    "GatewayClient", "TrainGateway", "MockGateway",
    "SelectionStore", "JsonSelectionStore", "MemorySelectionStore",
    "SessionProvider", "TokenSession",
]
