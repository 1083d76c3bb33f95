"""Human-readable event descriptions produced by the engine.

Every engine call returns a :class:`Notification` next to the new state. The
message is written to be shown in a status line or read aloud; the structured
fields let a presentation layer render or narrate the event its own way.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from eights_engine.cards import Card, Suit
from eights_engine.state import Participant


class NotificationKind(str, Enum):
    STARTED = "started"
    PLAYED = "played"
    WILD = "wild"
    SUIT_CHOSEN = "suit_chosen"
    DREW = "drew"
    PASSED = "passed"
    WON = "won"
    REJECTED = "rejected"
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class Notification:
    """An event description for the presentation layer.

    Attributes:
        kind: What happened
        message: Text for display or narration
        actor: Who acted, if anyone
        card: The card played or drawn, if any
        suit: The suit named by a wild eight, if any
    """

    kind: NotificationKind
    message: str
    actor: Participant | None = None
    card: Card | None = None
    suit: Suit | None = None

    @property
    def changed_state(self) -> bool:
        """Whether the call that produced this notification moved the game on."""
        return self.kind not in (NotificationKind.REJECTED, NotificationKind.IGNORED)

    def __str__(self) -> str:
        return self.message


def game_started() -> Notification:
    return Notification(NotificationKind.STARTED, "Your turn! Match the suit or rank.")


def card_played(actor: Participant, card: Card) -> Notification:
    who = "You" if actor == Participant.PLAYER else "AI"
    return Notification(
        NotificationKind.PLAYED, f"{who} played {card}.", actor=actor, card=card
    )


def wild_played(actor: Participant, card: Card, suit: Suit | None = None) -> Notification:
    """An eight hit the pile; ``suit`` is None while the player still has to pick."""
    if suit is None:
        message = "You played an 8! Choose a new suit."
    elif actor == Participant.PLAYER:
        message = f"You played an 8 and changed the suit to {suit.label}."
    else:
        message = f"AI played an 8 and changed the suit to {suit.label}."
    return Notification(NotificationKind.WILD, message, actor=actor, card=card, suit=suit)


def suit_chosen(suit: Suit) -> Notification:
    return Notification(
        NotificationKind.SUIT_CHOSEN,
        f"You changed the suit to {suit.label}. AI's turn.",
        actor=Participant.PLAYER,
        suit=suit,
    )


def card_drawn(actor: Participant, card: Card) -> Notification:
    if actor == Participant.PLAYER:
        message = f"You drew {card}. AI's turn."
    else:
        # The opponent's draw stays hidden from the player
        message = "AI had no playable card and drew a card."
        card = None
    return Notification(NotificationKind.DREW, message, actor=actor, card=card)


def turn_passed(actor: Participant) -> Notification:
    if actor == Participant.PLAYER:
        message = "The draw pile is empty! Turn skipped."
    else:
        message = "AI has no playable card and the draw pile is empty. Turn skipped."
    return Notification(NotificationKind.PASSED, message, actor=actor)


def game_won(winner: Participant, card: Card | None = None) -> Notification:
    if winner == Participant.PLAYER:
        message = "Congratulations! You win!"
    else:
        message = "AI wins! Better luck next time."
    return Notification(NotificationKind.WON, message, actor=winner, card=card)


def play_rejected(card: Card) -> Notification:
    return Notification(
        NotificationKind.REJECTED,
        "Invalid play! Match the suit or rank.",
        actor=Participant.PLAYER,
        card=card,
    )


def action_ignored(reason: str) -> Notification:
    return Notification(NotificationKind.IGNORED, reason)
