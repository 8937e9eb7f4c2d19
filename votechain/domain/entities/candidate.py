"""Candidate entity."""

from votechain.domain.entities.base import BaseEntity


class Candidate(BaseEntity):
    """選挙コントラクトに登録された候補者を表すエンティティ.

    ID はコントラクトが 1 から連番で採番する。候補者は追記のみで削除されず、
    得票数は投票トランザクションの成功によってのみ増加する。
    """

    def __init__(
        self,
        id: int,
        name: str,
        party: str,
        vote_count: int = 0,
    ) -> None:
        """候補者エンティティを初期化する.

        Args:
            id: コントラクトが採番した候補者ID（1始まり）
            name: 候補者名
            party: 所属政党
            vote_count: 得票数
        """
        super().__init__(id)
        self.name = name
        self.party = party
        self.vote_count = vote_count

    def __str__(self) -> str:
        """文字列表現を返す."""
        return f"#{self.id} {self.name} ({self.party}) - {self.vote_count}票"

    def same_record(self, other: "Candidate") -> bool:
        """ID だけでなく全フィールドが一致するかを返す."""
        return (
            self.id == other.id
            and self.name == other.name
            and self.party == other.party
            and self.vote_count == other.vote_count
        )
