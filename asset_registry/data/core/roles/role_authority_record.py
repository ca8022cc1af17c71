from asset_registry import db
from datetime import datetime


class RoleAuthorityRecord(db.Model):
    """
    Single-row table holding the admin principal of the role authority.
    Written once when the system is first built and never updated.
    """
    __tablename__ = 'role_authority'

    id = db.Column(db.Integer, primary_key=True)
    admin_principal = db.Column(db.String(80), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<RoleAuthorityRecord admin={self.admin_principal}>'
