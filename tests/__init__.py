"""
Adobe Target MCP Test Suite

Covers the request gateway, default merging, tool registration and dispatch,
template resources and the per-category tool handlers. The Admin API is
replaced by an httpx MockTransport, so no test touches the network.
"""
