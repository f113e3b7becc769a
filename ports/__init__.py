from .repos import FilesRepoPort, RecordRepoPort, ReRegistrationsRepoPort

__all__ = [
    "FilesRepoPort",
    "RecordRepoPort",
    "ReRegistrationsRepoPort",
]
