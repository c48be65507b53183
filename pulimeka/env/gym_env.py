from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from pulimeka.ai import Policy, SearchConfig, make_policy
from pulimeka.core import (
    ACTION_VECTOR_SIZE,
    NUM_NODES,
    Difficulty,
    GameResult,
    GameState,
    Role,
    decode_move,
    encode_move,
    enumerate_moves,
    has_any_move,
    initialize_game_state,
    play_move,
    render_board,
)
from pulimeka.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor


class PuliMekaEnv(gym.Env):
    """Single-agent view of the game.

    The agent plays ``agent_role``. With ``opponent_difficulty`` set, the other
    side is answered by the built-in AI; otherwise both sides are stepped by the
    caller and rewards stay relative to ``agent_role``.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        agent_role: Role = Role.GOAT,
        opponent_difficulty: Optional[Difficulty] = None,
        search_config: Optional[SearchConfig] = None,
        max_ply: int = 300,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.agent_role = agent_role
        self._opponent_difficulty = opponent_difficulty
        self._search_config = search_config
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=(BOARD_CHANNELS, NUM_NODES), dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(ACTION_VECTOR_SIZE)

        self._state: GameState = initialize_game_state()
        self._opponent: Optional[Policy] = None
        self._ply = 0

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._max_ply = options.get("max_ply", self._max_ply) if options else self._max_ply
        self._state = initialize_game_state()
        self._ply = 0
        self._opponent = None
        if self._opponent_difficulty is not None:
            self._opponent = make_policy(
                Difficulty(self._opponent_difficulty),
                self.agent_role.opponent,
                rng=self.np_random,
                config=self._search_config,
            )
            self._opponent_reply()
        observation = self._build_observation()
        info = self._build_info()
        return observation, info

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_terminal:
            raise ValueError("Episode is over; call reset().")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        move = decode_move(int(action_index), self._state.board)
        self._state = play_move(self._state, move)
        self._ply += 1
        self._opponent_reply()

        observation = self._build_observation()
        info = self._build_info()

        reward = self._compute_reward(self._state.result)
        terminated = self._state.is_terminal
        truncated = not terminated and (self._ply >= self._max_ply or info["stalemate"])
        return observation, reward, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._state.is_terminal:
            return mask
        for move in enumerate_moves(self._state.board, self._state.turn, self._state.goats_placed):
            mask[encode_move(move)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return render_board(self._state.board)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _opponent_reply(self) -> None:
        if self._opponent is None:
            return
        while not self._state.is_terminal and self._state.turn != self.agent_role and self._ply < self._max_ply:
            move = self._opponent.select(self._state)
            if move is None:
                return
            self._state = play_move(self._state, move)
            self._ply += 1

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._state), "aux": build_aux_vector(self._state)}

    def _build_info(self) -> Dict[str, object]:
        mask = self.legal_action_mask()
        return {
            "legal_action_mask": mask,
            "turn": self._state.turn,
            "stalemate": not self._state.is_terminal
            and not has_any_move(self._state.board, self._state.turn, self._state.goats_placed),
        }

    def _compute_reward(self, result: GameResult) -> float:
        if result == GameResult.ONGOING:
            return 0.0
        winner = Role.TIGER if result == GameResult.TIGER_WIN else Role.GOAT
        return 1.0 if winner == self.agent_role else -1.0
