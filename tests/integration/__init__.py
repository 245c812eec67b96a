"""Integration tests for gradual-rss.

Integration tests validate components with real I/O:
- Local files
- TCP connections to a local asyncio server
- Connected socket pairs

Run with: pytest tests/integration/ -v
"""
