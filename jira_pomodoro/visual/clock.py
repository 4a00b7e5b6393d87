"""Analog clock figure (Plotly) for the running pomodoro."""

from __future__ import annotations

import math

import plotly.graph_objects as go

FACE_COLOR = "#f5f5f5"
MINUTE_HAND_COLOR = "#333333"
SECOND_HAND_COLOR = "#d62728"

# Hand lengths relative to a unit-radius face
MINUTE_HAND_LENGTH = 0.62
SECOND_HAND_LENGTH = 0.82


def hand_endpoint(angle_deg: float, length: float) -> tuple[float, float]:
    """Tip of a hand rotated clockwise from twelve o'clock."""
    rad = math.radians(angle_deg)
    return length * math.sin(rad), length * math.cos(rad)


def clock_figure(minute_angle: float, second_angle: float, size: int = 280) -> go.Figure:
    fig = go.Figure()
    fig.add_shape(
        type="circle",
        x0=-1,
        y0=-1,
        x1=1,
        y1=1,
        fillcolor=FACE_COLOR,
        line={"color": MINUTE_HAND_COLOR, "width": 2},
    )
    for name, angle, length, color, width in (
        ("minute", minute_angle, MINUTE_HAND_LENGTH, MINUTE_HAND_COLOR, 6),
        ("second", second_angle, SECOND_HAND_LENGTH, SECOND_HAND_COLOR, 2),
    ):
        x, y = hand_endpoint(angle, length)
        fig.add_trace(
            go.Scatter(
                x=[0, x],
                y=[0, y],
                mode="lines",
                name=name,
                line={"color": color, "width": width},
                hoverinfo="skip",
            )
        )
    axis = {"visible": False, "range": [-1.1, 1.1], "fixedrange": True}
    fig.update_layout(
        width=size,
        height=size,
        showlegend=False,
        margin={"l": 0, "r": 0, "t": 0, "b": 0},
        xaxis=axis,
        yaxis={**axis, "scaleanchor": "x"},
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig
