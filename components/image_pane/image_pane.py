# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Square panes used for the original and edited images."""

import mesop as me


PANE_STYLE = me.Style(
    display="flex",
    flex_direction="column",
    flex_basis="400px",
    flex_grow=1,
    min_height=400,
    background=me.theme_var("surface-container-lowest"),
    border_radius=16,
    overflow_x="hidden",
    overflow_y="hidden",
)


@me.content_component
def image_pane(title: str):
    """A titled pane; children are rendered centered in its body."""
    with me.box(style=PANE_STYLE):
        me.text(
            title,
            style=me.Style(
                padding=me.Padding.all(12),
                font_weight="bold",
                font_size=14,
                border=me.Border(
                    bottom=me.BorderSide(width=1, style="solid", color=me.theme_var("outline-variant"))
                ),
            ),
        )
        with me.box(
            style=me.Style(
                flex_grow=1,
                display="flex",
                flex_direction="column",
                align_items="center",
                justify_content="center",
                gap=8,
                padding=me.Padding.all(16),
            )
        ):
            me.slot()


@me.component
def image_placeholder(icon: str, title: str, description: str):
    """Dashed placeholder shown when a pane has no image yet."""
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            align_items="center",
            justify_content="center",
            width="100%",
            height="100%",
            padding=me.Padding.all(32),
            text_align="center",
            border_radius=16,
            border=me.Border.all(
                me.BorderSide(width=2, style="dashed", color=me.theme_var("outline"))
            ),
        )
    ):
        me.icon(icon, style=me.Style(font_size=48, width=48, height=48, opacity=0.6))
        me.text(title, type="headline-6", style=me.Style(margin=me.Margin(top=16)))
        me.text(description, style=me.Style(font_size=14, opacity=0.8))


@me.component
def resolution_pill(resolution: str):
    me.text(
        f"Resolution: {resolution}",
        style=me.Style(
            font_size=12,
            padding=me.Padding.symmetric(vertical=4, horizontal=12),
            border_radius=16,
            background=me.theme_var("secondary-container"),
            color=me.theme_var("on-secondary-container"),
        ),
    )
