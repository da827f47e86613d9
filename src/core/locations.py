"""
Village Adventure - 장소 정의
=============================
고정된 5개 장소. 마을(Village)이 허브이며 모든 장소에서 돌아올 수 있다.
"""

from enum import Enum


class Location(Enum):
    """장소 (표시 이름, 한 줄 묘사)"""

    VILLAGE = ("Village", "A quiet village. Smoke rises from the chimneys.")
    BLACKSMITH = ("Blacksmith", "Hammers ring on anvils. Blades line the walls.")
    MARKET = ("Market", "Stalls crowd the square, selling potions and shields.")
    FOREST = ("Forest", "Dark trees close in. Something growls nearby.")
    DRAGON_CAVE = ("Dragon Cave", "Heat pours from the cave mouth. Bones litter the floor.")

    def __init__(self, display_name: str, description: str):
        self.display_name = display_name
        self.description = description

    @property
    def key(self) -> str:
        """API/로그용 식별자 (예: "dragon_cave")"""
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> "Location":
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown location: {key}") from None


STARTING_LOCATION = Location.VILLAGE
