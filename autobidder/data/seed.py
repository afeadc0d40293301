"""Seed calculators for the Autobidder pricing core.

A small set of typical home-service calculators, one per variable type,
used by the default engine and the sample API.
"""

from autobidder.models.enums import ConditionOperator, VariableType
from autobidder.models.formula import (
    ConditionalLogic,
    Formula,
    Variable,
    VariableOption,
)

SEED_FORMULAS: list[Formula] = [
    Formula(
        id=1,
        name="House Washing",
        title="House Washing Estimate",
        embed_id="house-washing",
        icon="home",
        formula="houseSize * 0.15 * stories + (includeDeck ? deckSize * 0.5 : 0)",
        variables=[
            Variable(id="houseSize", name="House size", type=VariableType.NUMBER, unit="sq ft"),
            Variable(
                id="stories",
                name="Number of stories",
                type=VariableType.DROPDOWN,
                default_value="1",
                options=[
                    VariableOption(label="1 story", value="1", numeric_value=1.0),
                    VariableOption(label="2 stories", value="2", numeric_value=1.25),
                    VariableOption(label="3 stories", value="3", numeric_value=1.5),
                ],
            ),
            Variable(id="includeDeck", name="Wash the deck too?", type=VariableType.CHECKBOX),
            Variable(
                id="deckSize",
                name="Deck size",
                type=VariableType.NUMBER,
                unit="sq ft",
                conditional_logic=ConditionalLogic(
                    enabled=True,
                    depends_on_variable="includeDeck",
                    condition=ConditionOperator.EQUALS,
                    expected_value=True,
                ),
            ),
        ],
    ),
    Formula(
        id=2,
        name="Window Cleaning",
        title="Window Cleaning Quote",
        embed_id="window-cleaning",
        icon="window",
        formula=(
            "(windowCount * cleaningType < 150 ? 150 : windowCount * cleaningType)"
            " + screens * windowCount * 2"
        ),
        variables=[
            Variable(id="windowCount", name="Number of windows", type=VariableType.NUMBER),
            Variable(
                id="cleaningType",
                name="Cleaning type",
                type=VariableType.SELECT,
                options=[
                    VariableOption(label="Exterior only", value="exterior", numeric_value=6),
                    VariableOption(label="Inside & out", value="both", numeric_value=10),
                ],
            ),
            Variable(id="screens", name="Clean screens", type=VariableType.CHECKBOX),
        ],
    ),
    Formula(
        id=3,
        name="Lawn Care",
        title="Lawn Care Package",
        embed_id="lawn-care",
        icon="leaf",
        formula="35 + lawnSize * 0.02 + extras",
        variables=[
            Variable(
                id="lawnSize",
                name="Lawn size",
                type=VariableType.SLIDER,
                unit="sq ft",
                default_value=5000,
            ),
            Variable(
                id="extras",
                name="Add-ons",
                type=VariableType.MULTIPLE_CHOICE,
                options=[
                    VariableOption(label="Edging", value="edging", numeric_value=25),
                    VariableOption(label="Weeding", value="weeding", numeric_value=40),
                    VariableOption(label="Leaf removal", value="leaves", numeric_value=60),
                ],
            ),
            Variable(id="gateCode", name="Gate code", type=VariableType.TEXT),
        ],
    ),
    Formula(
        id=4,
        name="Gutter Cleaning",
        title="Gutter Cleaning",
        embed_id="gutter-cleaning",
        icon="droplets",
        formula="linearFeet * 1.2 * roofPitch",
        variables=[
            Variable(id="linearFeet", name="Gutter length", type=VariableType.NUMBER, unit="ft"),
            Variable(
                id="roofPitch",
                name="Roof pitch",
                type=VariableType.SELECT,
                options=[
                    VariableOption(label="Walkable", value="low", multiplier=1.0),
                    VariableOption(label="Steep", value="steep", multiplier=1.5),
                ],
            ),
        ],
    ),
]
