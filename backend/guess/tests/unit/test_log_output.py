"""What the facade and entities write to a JSON log file."""

import structlog

from guess import api


def _events(lines, event):
    return [line for line in lines if line["event"] == event]


class TestFacadeLogContext:
    async def test_rejected_action_carries_code_and_context(self, ctx, json_log_file):
        await api.host(ctx, "Ada")
        await api.host(ctx, "Ada")

        [rejected] = _events(json_log_file(), "action rejected")
        assert rejected["action"] == "host"
        assert rejected["player"] == "Ada"
        assert rejected["error_code"] == "game_in_progress"
        assert rejected["level"] == "info"

    async def test_entity_lines_inherit_verb_context(self, ctx, json_log_file):
        await api.host(ctx, "Ada")
        await api.configure(ctx, "Ada", max_points=50)

        [configured] = _events(json_log_file(), "game configured")
        assert configured["action"] == "configure"
        assert configured["game"] == "Ada"
        assert configured["config"] == {"max_points": 50, "max_guess": 100}

    async def test_context_does_not_outlive_the_verb(self, ctx, json_log_file):
        await api.connect(ctx, "Bob")
        structlog.get_logger().info("after verb")

        [after] = _events(json_log_file(), "after verb")
        assert "action" not in after
        assert "player" not in after

    async def test_game_end_totals_are_plain_json(self, ctx, number_source, json_log_file):
        await api.host(ctx, "Ada")
        await api.configure(ctx, "Ada", max_points=50)
        number_source.extend([10])
        await api.start(ctx, "Ada")
        await api.play(ctx, "Ada", 10)

        [ended] = _events(json_log_file(), "game ended")
        assert ended["totals"] == {"Ada": 150}
        assert ended["player"] == "Ada"
