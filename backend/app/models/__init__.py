# Re-export Beanie documents
from .application import JobApplication
from .internship import Internship
