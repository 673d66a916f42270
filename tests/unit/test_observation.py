"""观测与动作编码测试"""
import numpy as np
import pytest
import torch

from core.cards import Card, Suit, Rank
from core.actions import Play, PlayType
from core.state import Hand
from env.observation import (
    INPUT_SIZE,
    OUTPUT_SIZE,
    HAND_FEATURES,
    FACEUP_OFFSET,
    POSITION_FEATURES,
    HIDDEN_FEATURE,
    ACTION_ORDER,
    encode_observation,
    decode_action,
    PolicyDecider,
)


@pytest.fixture
def hand():
    cards = [
        Card(Suit.SPADES, Rank.ACE),
        Card(Suit.SPADES, Rank.FIVE),
        Card(Suit.HEARTS, Rank.KING),
        Card(Suit.CLUBS, Rank.TEN),
        Card(Suit.DIAMONDS, Rank.QUEEN),
        Card(Suit.CLUBS, Rank.TWO),
    ]
    return Hand(cards=cards, visibility=[True, False, True, False, False, True])


class _ConstantNetwork:
    """返回固定输出的网络"""

    def __init__(self, output, input_dim=INPUT_SIZE):
        self.output = torch.tensor(output, dtype=torch.float32)
        self.input_dim = input_dim
        self.output_dim = len(output)
        self.seen = []

    def infer(self, features):
        self.seen.append(np.array(features, copy=True))
        return self.output


class TestLayout:
    """特征布局常量测试"""

    def test_sizes(self):
        assert POSITION_FEATURES == 14
        assert HAND_FEATURES == 84
        assert FACEUP_OFFSET == 84
        assert INPUT_SIZE == 97
        assert OUTPUT_SIZE == 9
        assert ACTION_ORDER == (PlayType.NOP, PlayType.SWAP_DISCARD, PlayType.DRAW)


class TestEncodeObservation:
    """encode_observation 测试"""

    def test_shape_and_dtype(self, hand):
        obs = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN))
        assert obs.shape == (INPUT_SIZE,)
        assert obs.dtype == np.float32

    def test_one_hot_per_position(self, hand):
        obs = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN))
        # 每个位置恰好一个 1，明牌区恰好一个 1
        for pos in range(6):
            block = obs[pos * POSITION_FEATURES:(pos + 1) * POSITION_FEATURES]
            assert block.sum() == 1.0
        assert obs[FACEUP_OFFSET:].sum() == 1.0
        assert obs.sum() == 7.0

    def test_visible_and_hidden(self, hand):
        obs = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN))
        assert obs[0 * POSITION_FEATURES + int(Rank.ACE)] == 1.0
        assert obs[1 * POSITION_FEATURES + HIDDEN_FEATURE] == 1.0
        assert obs[2 * POSITION_FEATURES + int(Rank.KING)] == 1.0
        assert obs[3 * POSITION_FEATURES + HIDDEN_FEATURE] == 1.0
        assert obs[5 * POSITION_FEATURES + int(Rank.TWO)] == 1.0

    def test_hidden_rank_not_leaked(self, hand):
        obs_a = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN))
        hand.cards[1] = Card(Suit.HEARTS, Rank.NINE)
        obs_b = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN))
        np.testing.assert_array_equal(obs_a, obs_b)

    def test_faceup_block_disjoint(self, hand):
        obs = encode_observation(hand, Card(Suit.HEARTS, Rank.ACE))
        assert obs[FACEUP_OFFSET + int(Rank.ACE)] == 1.0
        # 第 0 个位置的编码不受明牌影响
        assert obs[:POSITION_FEATURES].sum() == 1.0

    def test_legacy_offset_aliases_first_position(self, hand):
        obs = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN), faceup_offset=0)
        assert obs[int(Rank.SEVEN)] == 1.0
        assert obs[FACEUP_OFFSET:].sum() == 0.0

    def test_reuses_buffer(self, hand):
        buf = np.full(INPUT_SIZE, 5.0, dtype=np.float32)
        obs = encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN), out=buf)
        assert obs is buf
        assert buf.sum() == 7.0

    def test_buffer_too_small(self, hand):
        with pytest.raises(ValueError):
            encode_observation(hand, Card(Suit.HEARTS, Rank.SEVEN), out=np.zeros(10, dtype=np.float32))


class TestDecodeAction:
    """decode_action 测试"""

    def test_nop(self):
        output = np.array([9, 0, 0, 0, 0, 0, 5, 1, 1], dtype=np.float32)
        assert decode_action(output) == Play.nop()

    def test_swap_discard(self):
        output = np.array([0, 0, 0, 7, 0, 0, 1, 5, 1], dtype=np.float32)
        assert decode_action(output) == Play.swap_discard(3)

    def test_draw(self):
        output = np.array([0, 0, 0, 0, 0, 8, 1, 1, 5], dtype=np.float32)
        assert decode_action(output) == Play.draw(5)

    def test_ties_pick_first(self):
        output = np.array([2, 3, 3, 1, 3, 0, 4, 4, 4], dtype=np.float32)
        assert decode_action(output) == Play.nop()
        output = np.array([2, 3, 3, 1, 3, 0, 1, 4, 4], dtype=np.float32)
        assert decode_action(output) == Play.swap_discard(1)

    def test_torch_input(self):
        output = torch.tensor([0, 0, 6, 0, 0, 0, -1, -1, 2], dtype=torch.float32)
        assert decode_action(output) == Play.draw(2)

    def test_negative_logits(self):
        output = np.array([-5, -1, -3, -2, -9, -4, -3, -2, -7], dtype=np.float32)
        assert decode_action(output) == Play.swap_discard(1)

    def test_output_too_short(self):
        with pytest.raises(ValueError):
            decode_action(np.zeros(8, dtype=np.float32))


class TestPolicyDecider:
    """PolicyDecider 测试"""

    def test_decides_from_network_output(self, hand):
        net = _ConstantNetwork([0, 0, 0, 0, 1, 0, 0, 0, 1])
        decide = PolicyDecider(net)
        assert decide(hand, Card(Suit.HEARTS, Rank.SEVEN)) == Play.draw(4)

    def test_feeds_encoded_observation(self, hand):
        net = _ConstantNetwork([0] * 9)
        decide = PolicyDecider(net)
        faceup = Card(Suit.HEARTS, Rank.SEVEN)
        decide(hand, faceup)
        np.testing.assert_array_equal(net.seen[0], encode_observation(hand, faceup))

    def test_rejects_small_network(self):
        with pytest.raises(ValueError):
            PolicyDecider(_ConstantNetwork([0] * 9, input_dim=INPUT_SIZE - 1))

    def test_rejects_narrow_output(self):
        with pytest.raises(ValueError):
            PolicyDecider(_ConstantNetwork([0] * (OUTPUT_SIZE - 1)))
