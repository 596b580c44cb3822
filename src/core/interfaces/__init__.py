"""Core interfaces.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- The Core depends on abstractions, so commands can be tested with fakes.
"""
