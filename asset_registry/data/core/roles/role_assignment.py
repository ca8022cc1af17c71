from asset_registry import db
from datetime import datetime


class RoleAssignment(db.Model):
    """Membership of one principal in one role"""
    __tablename__ = 'role_assignments'
    __table_args__ = (
        db.UniqueConstraint('role', 'principal', name='uq_role_assignment_role_principal'),
    )

    id = db.Column(db.Integer, primary_key=True)
    role = db.Column(db.String(50), nullable=False, index=True)
    principal = db.Column(db.String(80), nullable=False, index=True)
    granted_at = db.Column(db.DateTime, default=datetime.utcnow)
    granted_by = db.Column(db.String(80), nullable=True)

    def __repr__(self):
        return f'<RoleAssignment {self.role}: {self.principal}>'
