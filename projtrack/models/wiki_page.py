from ..extensions import db
from .journaled import Journaled
from .types import utcnow


class WikiPage(Journaled, db.Model):
    __journaled_fields__ = ("title", "text")
    __journal_delegates__ = ("title", "text")

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey("project.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    text = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    project = db.relationship("Project", backref=db.backref("wiki_pages", cascade="all, delete-orphan"))

    def journal_editable_by(self, user):
        return self.project.journal_editable_by(user)
