"""Projects feature: the catalog of game module projects."""

from catalog_service.features.projects.models import Project
from catalog_service.features.projects.router import router
from catalog_service.features.projects.service import ProjectService

__all__ = ["Project", "ProjectService", "router"]
