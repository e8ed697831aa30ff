from dataclasses import dataclass


@dataclass(frozen=True)
class StaffOption:
    id: str
    full_name: str
    category: str  # "men", "women" or "both"

    @property
    def display_name(self) -> str:
        name = self.full_name or "-"
        if self.category == "both":
            return f"{name} (her ikisi)"
        return name
