"""gh-labeler.

Declarative GitHub label synchronization:
- label configuration loaded from JSON/YAML files, stdin, or another repository
- rename detection through aliases and name similarity
- structured logging and CI-friendly exit codes
"""

__version__ = "0.1.0"

from gh_labeler.labels import DesiredLabel, ExistingLabel
from gh_labeler.sync import LabelSyncer, SyncOptions, sync_repository_labels

__all__ = [
    "__version__",
    "DesiredLabel",
    "ExistingLabel",
    "LabelSyncer",
    "SyncOptions",
    "sync_repository_labels",
]
