"""Real-time channel — chat and catalog-change notifications over WebSocket.

Events flow as JSON frames {"event", "data"}:
1. Client → /ws → ChatChannel.dispatch (one handler per event variant)
2. ChatChannel → ConnectionManager.broadcast → every open socket

The connection registry lives in process memory. Presence is per server
instance; a second instance keeps its own registry.
"""
