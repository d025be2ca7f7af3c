from tasknet.models.document import Document
from tasknet.models.note import Note
from tasknet.models.project import Project
from tasknet.models.task import Task
from tasknet.models.wiki import Wiki

__all__ = [
    "Note",
    "Task",
    "Project",
    "Wiki",
    "Document",
]
