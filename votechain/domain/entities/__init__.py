from votechain.domain.entities.base import BaseEntity
from votechain.domain.entities.candidate import Candidate


__all__ = ["BaseEntity", "Candidate"]
