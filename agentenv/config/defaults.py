"""Default behavior configuration.

A balance-the-ball style behavior with a vector observation and two
continuous actions, plus a grid behavior with a visual observation and a
single discrete branch.  All values are explicit.
"""

from agentenv.config.schema import (
    ActionSpecConfig,
    BehaviorSpecConfig,
    EnvironmentSpecConfig,
    ObservationSpecConfig,
)


def default_config(seed: int = 0) -> EnvironmentSpecConfig:
    """Return a complete, valid example config."""
    return EnvironmentSpecConfig(
        seed=seed,
        behaviors={
            "Ball?team=0": BehaviorSpecConfig(
                observation_specs=[
                    ObservationSpecConfig(
                        shape=[8],
                        dimension_property=[1],
                        name="VectorSensor",
                    ),
                ],
                action_spec=ActionSpecConfig(continuous_size=2),
            ),
            "Grid?team=0": BehaviorSpecConfig(
                observation_specs=[
                    ObservationSpecConfig(
                        shape=[84, 84, 3],
                        dimension_property=[2, 2, 1],
                        name="CameraSensor",
                    ),
                    ObservationSpecConfig(
                        shape=[2],
                        observation_type="goal_signal",
                        name="GoalSensor",
                    ),
                ],
                action_spec=ActionSpecConfig(discrete_branches=[5]),
            ),
        },
    )
