from .app import app, app_state
from .commands import update, check

__all__ = ['app', 'app_state']
