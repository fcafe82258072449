from dataclasses import dataclass
from typing import Tuple

WIN = "win"
LOSE = "lose"


@dataclass(frozen=True)
class Offer:
    id: int
    title: str
    description: str
    category: str
    symbol: str


CATALOG: Tuple[Offer, ...] = (
    Offer(1, "Free Chocolate Waffle", "Enjoy a delicious chocolate waffle on us!", WIN, "🧇"),
    Offer(2, "Free Pancake", "A fluffy pancake with your favorite toppings!", WIN, "🥞"),
    Offer(3, "Free Cooler", "Beat the heat with a refreshing cooler!", WIN, "🥤"),
    Offer(4, "Free Waffle Stick", "Crispy waffle stick just for you!", WIN, "🧇"),
    Offer(5, "Free Cold Coffee", "Iced coffee to energize your day!", WIN, "☕"),
    Offer(6, "Better luck Next Time", "Don't give up! Come back tomorrow for another chance!", LOSE, "🍀"),
    Offer(7, "You'll get it next time", "Keep trying! Your perfect offer is waiting!", LOSE, "🎯"),
    Offer(8, "It's okay, everyone experiences setbacks sometimes", "Tomorrow brings new opportunities!", LOSE, "💪"),
)


def partition(catalog: Tuple[Offer, ...]) -> Tuple[Tuple[Offer, ...], Tuple[Offer, ...]]:
    wins = tuple(o for o in catalog if o.category == WIN)
    losses = tuple(o for o in catalog if o.category == LOSE)
    if not wins or not losses:
        raise ValueError("Offer catalog needs at least one win and one lose entry")
    return wins, losses
