"""
REST Web App: a FastAPI backend serving one sample record and a client that
fetches it through a small state machine.
"""

__version__ = "1.0.0"
