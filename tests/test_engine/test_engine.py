"""Tests for the turn engine."""

import pytest

from eights_engine.actions import ChooseSuit, DrawCard, Pass, PlayCard
from eights_engine.cards import Card, Rank, Suit, card_id, create_deck
from eights_engine.engine import (
    advance_opponent_turn,
    choose_suit,
    draw_card,
    execute_action,
    play_card,
    start_game,
)
from eights_engine.errors import DealError, IllegalActionError, IllegalPlayError
from eights_engine.notifications import NotificationKind
from eights_engine.state import GameState, GameStatus, Participant


def make(rank: Rank, suit: Suit) -> Card:
    return Card(card_id(suit, rank), suit, rank)


def make_state(**kwargs) -> GameState:
    defaults = dict(
        player_hand=(
            make(Rank.SEVEN, Suit.HEARTS),
            make(Rank.FIVE, Suit.DIAMONDS),
            make(Rank.EIGHT, Suit.CLUBS),
        ),
        ai_hand=(make(Rank.KING, Suit.CLUBS), make(Rank.THREE, Suit.SPADES)),
        draw_pile=(make(Rank.QUEEN, Suit.SPADES), make(Rank.ACE, Suit.CLUBS)),
        discard_pile=(make(Rank.NINE, Suit.HEARTS),),
        current_suit=Suit.HEARTS,
        current_rank=Rank.NINE,
        status=GameStatus.PLAYING,
    )
    defaults.update(kwargs)
    return GameState(**defaults)


class TestStartGame:
    def test_start_game_deals(self):
        state = start_game(seed=42)
        assert state.status == GameStatus.PLAYING
        assert len(state.player_hand) == 8
        assert len(state.ai_hand) == 8
        assert len(state.draw_pile) == 35

    def test_start_game_with_bad_deck(self):
        with pytest.raises(DealError):
            start_game(deck=create_deck()[:10])


class TestPlayCard:
    def test_play_matching_card(self):
        state = make_state()

        new_state, notification = play_card(state, "hearts-7")

        assert [c.id for c in new_state.player_hand] == ["diamonds-5", "clubs-8"]
        assert new_state.discard_pile[0].id == "hearts-7"
        assert new_state.discard_pile[1:] == state.discard_pile
        assert new_state.current_suit == Suit.HEARTS
        assert new_state.current_rank == Rank.SEVEN
        assert new_state.turn == Participant.AI
        assert new_state.status == GameStatus.PLAYING
        assert notification.kind == NotificationKind.PLAYED
        assert notification.card.id == "hearts-7"

    def test_play_matching_rank_changes_suit(self):
        state = make_state(
            player_hand=(make(Rank.NINE, Suit.SPADES), make(Rank.TWO, Suit.CLUBS))
        )
        new_state, _ = play_card(state, "spades-9")
        assert new_state.current_suit == Suit.SPADES
        assert new_state.current_rank == Rank.NINE

    def test_illegal_play_is_rejected(self):
        state = make_state()

        new_state, notification = play_card(state, "diamonds-5")

        assert new_state is state
        assert len(new_state.player_hand) == 3
        assert new_state.discard_pile[0].id == "hearts-9"
        assert notification.kind == NotificationKind.REJECTED
        assert notification.message == "Invalid play! Match the suit or rank."
        assert not notification.changed_state

    def test_unknown_card_is_ignored(self):
        state = make_state()
        new_state, notification = play_card(state, "spades-K")
        assert new_state is state
        assert notification.kind == NotificationKind.IGNORED

    def test_out_of_turn_play_is_ignored(self):
        state = make_state(turn=Participant.AI)
        new_state, notification = play_card(state, "hearts-7")
        assert new_state is state
        assert notification.kind == NotificationKind.IGNORED

    def test_play_before_deal_is_ignored(self):
        state = GameState()
        new_state, notification = play_card(state, "hearts-7")
        assert new_state is state
        assert notification.kind == NotificationKind.IGNORED

    def test_duplicate_looking_cards_removed_by_id(self):
        first = Card("a", Suit.HEARTS, Rank.SEVEN)
        second = Card("b", Suit.HEARTS, Rank.SEVEN)
        state = make_state(player_hand=(first, second))

        new_state, _ = play_card(state, "b")

        assert new_state.player_hand == (first,)
        assert new_state.discard_pile[0] is second


class TestWildEight:
    def test_player_eight_enters_suit_picking(self):
        state = make_state()

        new_state, notification = play_card(state, "clubs-8")

        assert new_state.status == GameStatus.SUIT_PICKING
        assert new_state.turn == Participant.PLAYER
        assert new_state.discard_pile[0].id == "clubs-8"
        # Suit and rank are only updated once the suit is chosen
        assert new_state.current_suit == Suit.HEARTS
        assert new_state.current_rank == Rank.NINE
        assert notification.kind == NotificationKind.WILD
        assert notification.suit is None

    def test_choose_suit(self):
        state, _ = play_card(make_state(), "clubs-8")

        new_state, notification = choose_suit(state, Suit.SPADES)

        assert new_state.status == GameStatus.PLAYING
        assert new_state.current_suit == Suit.SPADES
        assert new_state.current_rank == Rank.EIGHT
        assert new_state.turn == Participant.AI
        assert notification.kind == NotificationKind.SUIT_CHOSEN

    def test_choose_suit_outside_suit_picking_is_ignored(self):
        state = make_state()
        new_state, notification = choose_suit(state, Suit.SPADES)
        assert new_state is state
        assert notification.kind == NotificationKind.IGNORED

    def test_no_play_or_draw_while_picking_suit(self):
        state, _ = play_card(make_state(), "clubs-8")

        after_play, play_note = play_card(state, "hearts-7")
        after_draw, draw_note = draw_card(state)

        assert after_play is state
        assert after_draw is state
        assert play_note.kind == NotificationKind.IGNORED
        assert draw_note.kind == NotificationKind.IGNORED

    def test_opponent_cannot_act_while_player_picks(self):
        state, _ = play_card(make_state(), "clubs-8")
        new_state, notification = advance_opponent_turn(state)
        assert new_state is state
        assert notification.kind == NotificationKind.IGNORED

    def test_declared_suit_sets_rank_immediately(self):
        state = make_state(
            turn=Participant.AI,
            ai_hand=(make(Rank.EIGHT, Suit.SPADES), make(Rank.THREE, Suit.CLUBS)),
        )

        new_state, notification = execute_action(
            state, PlayCard("spades-8", declared_suit=Suit.CLUBS)
        )

        assert new_state.current_suit == Suit.CLUBS
        assert new_state.current_rank == Rank.EIGHT
        assert new_state.turn == Participant.PLAYER
        assert new_state.status == GameStatus.PLAYING
        assert notification.suit == Suit.CLUBS

    def test_opponent_must_declare_suit(self):
        state = make_state(
            turn=Participant.AI,
            ai_hand=(make(Rank.EIGHT, Suit.SPADES), make(Rank.THREE, Suit.CLUBS)),
        )
        with pytest.raises(IllegalActionError):
            execute_action(state, PlayCard("spades-8"))

    def test_only_eights_declare_suit(self):
        with pytest.raises(IllegalActionError):
            execute_action(make_state(), PlayCard("hearts-7", declared_suit=Suit.CLUBS))


class TestDraw:
    def test_draw_adds_card_to_end_of_hand(self):
        state = make_state()

        new_state, notification = draw_card(state)

        assert new_state.player_hand[-1].id == "spades-Q"
        assert len(new_state.player_hand) == 4
        assert [c.id for c in new_state.draw_pile] == ["clubs-A"]
        assert new_state.turn == Participant.AI
        assert notification.kind == NotificationKind.DREW
        assert notification.card.id == "spades-Q"

    def test_draw_from_empty_pile_passes_turn(self):
        state = make_state(draw_pile=())

        new_state, notification = draw_card(state)

        assert new_state.player_hand == state.player_hand
        assert new_state.turn == Participant.AI
        assert notification.kind == NotificationKind.PASSED

    def test_out_of_turn_draw_is_ignored(self):
        state = make_state(turn=Participant.AI)
        new_state, _ = draw_card(state)
        assert new_state is state

    def test_opponent_draw_hides_card(self):
        state = make_state(turn=Participant.AI)
        new_state, notification = execute_action(state, DrawCard())
        assert new_state.ai_hand[-1].id == "spades-Q"
        assert notification.card is None


class TestPass:
    def test_pass_with_cards_to_draw_is_illegal(self):
        with pytest.raises(IllegalActionError):
            execute_action(make_state(), Pass())

    def test_pass_with_empty_pile(self):
        new_state, _ = execute_action(make_state(draw_pile=()), Pass())
        assert new_state.turn == Participant.AI


class TestExecuteAction:
    def test_illegal_play_raises(self):
        with pytest.raises(IllegalPlayError) as exc_info:
            execute_action(make_state(), PlayCard("diamonds-5"))
        assert exc_info.value.card.id == "diamonds-5"

    def test_game_over_rejects_actions(self):
        state = make_state().with_winner(Participant.PLAYER)
        with pytest.raises(IllegalActionError):
            execute_action(state, DrawCard())

    def test_choose_suit_needs_suit_picking(self):
        with pytest.raises(IllegalActionError):
            execute_action(make_state(), ChooseSuit(Suit.HEARTS))


class TestWinning:
    def test_player_wins_with_last_card(self):
        state = make_state(player_hand=(make(Rank.SEVEN, Suit.HEARTS),))

        new_state, notification = play_card(state, "hearts-7")

        assert new_state.status == GameStatus.GAME_OVER
        assert new_state.winner == Participant.PLAYER
        assert new_state.player_hand == ()
        assert notification.kind == NotificationKind.WON

    def test_last_card_eight_wins_without_suit_pick(self):
        state = make_state(player_hand=(make(Rank.EIGHT, Suit.CLUBS),))

        new_state, _ = play_card(state, "clubs-8")

        assert new_state.status == GameStatus.GAME_OVER
        assert new_state.winner == Participant.PLAYER

    def test_opponent_wins_with_last_card(self):
        state = make_state(turn=Participant.AI, ai_hand=(make(Rank.TWO, Suit.HEARTS),))

        new_state, notification = advance_opponent_turn(state)

        assert new_state.status == GameStatus.GAME_OVER
        assert new_state.winner == Participant.AI
        assert notification.actor == Participant.AI

    def test_no_actions_after_game_over(self):
        state = make_state(player_hand=(make(Rank.SEVEN, Suit.HEARTS),))
        over, _ = play_card(state, "hearts-7")

        assert draw_card(over)[0] is over
        assert advance_opponent_turn(over)[0] is over


class TestAdvanceOpponentTurn:
    def test_ignored_on_player_turn(self):
        state = make_state()
        new_state, notification = advance_opponent_turn(state)
        assert new_state is state
        assert notification.kind == NotificationKind.IGNORED

    def test_opponent_plays_and_returns_turn(self):
        state = make_state(
            turn=Participant.AI,
            ai_hand=(make(Rank.KING, Suit.CLUBS), make(Rank.NINE, Suit.SPADES)),
        )

        new_state, notification = advance_opponent_turn(state)

        assert new_state.discard_pile[0].id == "spades-9"
        assert new_state.current_suit == Suit.SPADES
        assert new_state.current_rank == Rank.NINE
        assert new_state.turn == Participant.PLAYER
        assert notification.kind == NotificationKind.PLAYED

    def test_custom_strategy(self):
        from strategies.random_strategy import RandomStrategy

        state = make_state(turn=Participant.AI)
        new_state, _ = advance_opponent_turn(state, RandomStrategy(seed=0))
        assert new_state.turn == Participant.PLAYER


class TestScenarios:
    def test_full_turn_cycle(self):
        state = make_state(
            ai_hand=(make(Rank.KING, Suit.CLUBS), make(Rank.THREE, Suit.HEARTS)),
        )

        state, _ = play_card(state, "hearts-7")
        assert state.turn == Participant.AI

        state, _ = advance_opponent_turn(state)
        assert state.turn == Participant.PLAYER
        assert state.discard_pile[0].id == "hearts-3"
        assert [c.id for c in state.discard_pile] == ["hearts-3", "hearts-7", "hearts-9"]

    def test_conservation_through_actions(self):
        state = start_game(seed=5)
        expected = sorted(c.id for c in state.all_cards())

        for _ in range(20):
            if state.is_game_over:
                break
            if state.awaiting_opponent:
                state, _ = advance_opponent_turn(state)
            else:
                state, _ = draw_card(state)
            assert sorted(c.id for c in state.all_cards()) == expected
