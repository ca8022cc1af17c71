from asset_registry.data.core.audited_base import AuditedBase
from asset_registry import db

class Asset(AuditedBase):
    """
    Registered asset. The id comes from AssetIDManager rather than the
    database autoincrement so that ids start at 0 and are never reused.
    """
    __tablename__ = 'assets'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    details = db.Column(db.Text, nullable=False, default='')
    owner = db.Column(db.String(80), nullable=False, index=True)
    pending_owner = db.Column(db.String(80), nullable=True)
    transfer_condition = db.Column(db.Text, nullable=False, default='')

    @property
    def has_pending_transfer(self) -> bool:
        return self.pending_owner is not None

    def __repr__(self):
        return f'<Asset {self.id} owner={self.owner}>'
