from dataclasses import dataclass


@dataclass(frozen=True)
class DeleteSuccess:
    document_id: str

    success = True


@dataclass(frozen=True)
class DeleteFailure:
    reason: str

    success = False


DeleteOutcome = DeleteSuccess | DeleteFailure
