# engine/state.py
import os
from typing import Dict

from ..data_model import Project, ProjectFormatError, parse_project, project_to_document
from .storage import load_projects, save_projects

DATA_DIR = os.environ.get("FINSIM_DATA_DIR", "user_data")


class ProjectState:
    """Saved project documents keyed by name, persisted as one JSON file.

    Documents are validated and normalised to the export shape before they
    are written, so any stored entry can be parsed back into a
    :class:`Project`.
    """

    def __init__(self, storage_path: str | None = None):
        self.storage_path = storage_path or os.path.join(DATA_DIR, "projects.json")
        self.projects: Dict[str, dict] = load_projects(self.storage_path)

    def list_names(self):
        return sorted(self.projects.keys())

    def get(self, name: str) -> dict | None:
        return self.projects.get(name)

    def load_project(self, name: str) -> Project | None:
        document = self.projects.get(name)
        if document is None:
            return None
        return parse_project(document)

    def save(self, name: str, payload) -> dict:
        """Store ``payload`` under ``name`` and return the normalised document.

        Raises ``ProjectFormatError`` for a blank name or an invalid document;
        nothing is written in that case.
        """
        name = str(name or "").strip()
        if not name:
            raise ProjectFormatError("Project name is required.")
        document = project_to_document(parse_project(payload))
        self.projects[name] = document
        self._save()
        return document

    def delete(self, name: str) -> bool:
        if name in self.projects:
            del self.projects[name]
            self._save()
            return True
        return False

    def _save(self) -> None:
        save_projects(self.storage_path, self.projects)
