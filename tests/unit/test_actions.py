"""动作类型测试"""
import pytest

from core.actions import Play, PlayType


class TestPlayType:
    """PlayType 测试"""

    def test_order(self):
        assert PlayType.NOP == 0
        assert PlayType.SWAP_DISCARD == 1
        assert PlayType.DRAW == 2


class TestPlay:
    """Play 测试"""

    def test_nop(self):
        play = Play.nop()
        assert play.is_nop
        assert play.position is None
        assert str(play) == "Nop"

    def test_swap_discard(self):
        play = Play.swap_discard(3)
        assert play.play_type == PlayType.SWAP_DISCARD
        assert play.position == 3
        assert str(play) == "SwapDiscard(3)"

    def test_draw(self):
        play = Play.draw(5)
        assert play.play_type == PlayType.DRAW
        assert play.position == 5
        assert str(play) == "Draw(5)"

    def test_equality(self):
        assert Play.draw(1) == Play.draw(1)
        assert Play.draw(1) != Play.swap_discard(1)
        assert Play.nop() == Play.nop()

    def test_position_required(self):
        with pytest.raises(ValueError):
            Play(PlayType.DRAW)
        with pytest.raises(ValueError):
            Play(PlayType.SWAP_DISCARD)

    def test_nop_rejects_position(self):
        with pytest.raises(ValueError):
            Play(PlayType.NOP, 2)

    def test_immutable(self):
        play = Play.draw(0)
        with pytest.raises(AttributeError):
            play.position = 1
