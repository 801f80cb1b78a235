from ..extensions import db
from .journaled import Journaled
from .types import utcnow


class Project(Journaled, db.Model):
    __journaled_fields__ = ("name", "identifier", "description")
    __journal_delegates__ = ("name", "identifier", "description", "owner")

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    identifier = db.Column(db.String(64), unique=True, nullable=False)
    description = db.Column(db.Text)
    owner_id = db.Column(db.Integer, db.ForeignKey("user.id"), index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_on = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    owner = db.relationship("User")

    def journal_editable_by(self, user):
        if super().journal_editable_by(user):
            return True
        return user is not None and user.id is not None and user.id == self.owner_id
