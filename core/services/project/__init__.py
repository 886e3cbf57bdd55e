from core.services.project.sample import SAMPLE_PROJECT_NAME, build_sample_project
from core.services.project.service import ProjectService

__all__ = ["ProjectService", "SAMPLE_PROJECT_NAME", "build_sample_project"]
