# budget_backend/models.py
# lightweight model classes (not DB-bound ORM)

ENTRY_TYPES = ("INCOME", "EXPENSE")


class User:
    def __init__(self, id, username, password_hash, created_at=None):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.created_at = created_at

    def public_dict(self):
        return {"id": self.id, "username": self.username}


class Entry:
    def __init__(self, type, amount, date, description="", category=None):
        self.type = type
        self.amount = amount
        self.date = date
        self.description = description
        self.category = category

    @classmethod
    def from_row(cls, row):
        return cls(
            type=row["type"],
            amount=row["amount"],
            date=row["date"],
            description=row.get("description") or "",
            category=row.get("category"),
        )

    def to_dict(self):
        """JSON shape sent to the client; amounts are floats and dates ISO strings"""
        data = {
            "type": self.type,
            "amount": float(self.amount),
            "date": self.date.isoformat() if hasattr(self.date, "isoformat") else str(self.date),
            "description": self.description,
        }
        if self.category:
            data["category"] = self.category
        return data
