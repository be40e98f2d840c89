import logging

from retrospace.config import settings
from retrospace.core.log import configure_logging


class TestConfigureLogging:
    """Root logger setup tests."""
    
    def test_defaults_to_configured_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        
        configure_logging()
        
        assert calls[0]["level"] == settings.log_level.upper()
    
    def test_explicit_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        
        configure_logging("debug")
        
        assert calls[0]["level"] == "DEBUG"
