"""Services package for browser session management."""
