from ..extensions import db
from .journaled import Journaled
from .types import utcnow


class Issue(Journaled, db.Model):
    __journaled_fields__ = ("subject", "description", "status", "assigned_to_id")
    __journal_delegates__ = ("subject", "description", "status", "author", "author_name")

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey("project.id"), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey("user.id"), index=True)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey("user.id"))
    subject = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(
        db.Enum("new", "in_progress", "resolved", "closed", name="issue_status"),
        default="new",
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_on = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    project = db.relationship("Project", backref=db.backref("issues", cascade="all, delete-orphan"))
    author = db.relationship("User", foreign_keys=[author_id])
    assigned_to = db.relationship("User", foreign_keys=[assigned_to_id])

    @property
    def author_name(self):
        return self.author.login

    def journal_editable_by(self, user):
        if user is None:
            return False
        if user.id is not None and user.id == self.author_id:
            return True
        return self.project.journal_editable_by(user)
