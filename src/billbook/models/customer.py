from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """Billed party. Never edited once stored; removed by id."""

    id: int
    name: str
    address: str = ""
    email: str = ""
    phone: str = ""

    @classmethod
    def from_record(cls, row: list[str]) -> Customer:
        """Create a Customer from a persisted row: id,name,address,email,phone.

        Raises ValueError for a non-integer id; missing trailing fields are blank.
        """
        fields = list(row) + [""] * (5 - len(row))
        return cls(
            id=int(fields[0]),
            name=fields[1],
            address=fields[2],
            email=fields[3],
            phone=fields[4],
        )

    def to_record(self) -> list[str]:
        return [str(self.id), self.name, self.address, self.email, self.phone]

    @property
    def search_text(self) -> str:
        return f"{self.name} {self.email}"
