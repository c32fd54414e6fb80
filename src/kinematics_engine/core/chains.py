"""
Static catalog of named kinematic chains.

The catalog is defined once at import time and never mutated. Ids, DOF
values, joint types and descriptions are consumed by existing clients and
must stay stable.
"""

from dataclasses import asdict, dataclass
from typing import Any

from kinematics_engine.core.exceptions import ChainNotFoundError


@dataclass(frozen=True)
class ChainDescriptor:
    """Descriptor of a kinematic chain preset."""

    id: str
    name: str
    description: str
    dof: int
    joint_type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


CHAINS: tuple[ChainDescriptor, ...] = (
    ChainDescriptor(
        id="human_arm",
        name="Human Arm",
        description="7-DOF human arm: shoulder(3) + elbow(1) + wrist(3)",
        dof=7,
        joint_type="revolute",
    ),
    ChainDescriptor(
        id="human_leg",
        name="Human Leg",
        description="6-DOF human leg: hip(3) + knee(1) + ankle(2)",
        dof=6,
        joint_type="revolute",
    ),
    ChainDescriptor(
        id="robotic_arm_6dof",
        name="Robotic Arm (6-DOF)",
        description="Standard industrial 6-DOF manipulator",
        dof=6,
        joint_type="revolute",
    ),
    ChainDescriptor(
        id="delta_robot",
        name="Delta Robot",
        description="3-DOF parallel kinematic delta robot for high-speed pick-and-place",
        dof=3,
        joint_type="prismatic",
    ),
    ChainDescriptor(
        id="scara",
        name="SCARA",
        description="4-DOF selective compliance assembly robot arm",
        dof=4,
        joint_type="revolute+prismatic",
    ),
)

_CHAINS_BY_ID: dict[str, ChainDescriptor] = {chain.id: chain for chain in CHAINS}


def list_chains() -> list[ChainDescriptor]:
    """Return every registered chain in catalog order."""
    return list(CHAINS)


def get_chain(chain_id: str) -> ChainDescriptor:
    """
    Look up a chain by id.

    Raises:
        ChainNotFoundError: If no chain has this id.
    """
    try:
        return _CHAINS_BY_ID[chain_id]
    except KeyError:
        raise ChainNotFoundError(chain_id, available=list(_CHAINS_BY_ID))
