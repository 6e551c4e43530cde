"""
Journal client: HTTP transport, view state, session and rendering.
"""
from .api_client import EntryClient
from .records import EntryRecord
from .session import JournalSession
from .view_state import ClientViewState, View

__all__ = ['EntryClient', 'EntryRecord', 'JournalSession', 'ClientViewState', 'View']
