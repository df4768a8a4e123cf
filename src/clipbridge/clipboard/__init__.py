from clipbridge.clipboard.base import ClipboardBackend
from clipbridge.clipboard.factory import get_backend, select_action, select_remote
from clipbridge.clipboard.probe import probe

__all__ = [
    'ClipboardBackend',
    'get_backend',
    'probe',
    'select_action',
    'select_remote',
]
