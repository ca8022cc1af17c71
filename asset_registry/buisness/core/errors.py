"""
Domain exceptions for the asset registry

Every error aborts the call that raised it with no state change. ``kind`` is
the machine-readable category surfaced to API callers.
"""


class LedgerDomainError(Exception):
    """Base exception for all asset registry domain errors"""

    kind = 'DomainError'
    default_message = 'Asset registry error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.kind, 'message': self.message}


class UnauthorizedError(LedgerDomainError):
    """Raised when the caller lacks the required role or admin status"""

    kind = 'Unauthorized'
    default_message = 'Caller is not authorized'


class AssetNotFoundError(LedgerDomainError):
    """Raised when a referenced asset id was never registered"""

    kind = 'NotFound'
    default_message = 'invalid asset ID'

    def __init__(self, asset_id=None, message=None):
        self.asset_id = asset_id
        if message is None and asset_id is not None:
            message = f'invalid asset ID: {asset_id}'
        super().__init__(message)


class InvalidIndexError(LedgerDomainError):
    """Raised when a log index is not below the current record count"""

    kind = 'InvalidIndex'
    default_message = 'Invalid index'

    def __init__(self, index=None, length=None):
        self.index = index
        self.length = length
        message = None
        if index is not None and length is not None:
            message = f'Invalid index: {index} (records: {length})'
        super().__init__(message)


class TransferNotPendingError(LedgerDomainError):
    """Raised when an ownership transfer is accepted but none was proposed"""

    kind = 'TransferNotPending'
    default_message = 'No ownership transfer is pending'


class LedgerConfigurationError(LedgerDomainError):
    """Raised when the role authority is missing or conflicts with configuration"""

    kind = 'Configuration'
    default_message = 'Role authority is not configured'
