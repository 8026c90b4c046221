"""Renderer: draws one FrameDescriptor per call and flips the window.

All state (fonts, colours, sizes) comes from the injected PsychoPy window and
style dict. The window must use 'pix' units; geometry coordinates (origin
top-left, y down) are converted here.
"""
from __future__ import annotations

from typing import Any, Optional

from psychopy import visual

from models import FrameDescriptor, FrameKind
from path_utils import file_exists_nonempty, fitted_size_keep_aspect, resolve_path
from rating_types import StyleConfig
from scale_geometry import ContinuousScaleGeometry, DiscreteScaleGeometry


class PsychoPyRenderer:
    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    def __init__(self, win: visual.Window, style: StyleConfig):
        self.win = win
        self.style = style
        # Colour space is fixed per renderer instead of a global colour-mode flag
        self.colour_space = style.get('colour_space', 'rgb1')

    def render(self, frame: FrameDescriptor) -> None:
        """Draw the frame and flip once."""
        style: StyleConfig = {**self.style, **frame.style}
        self.draw_background(style)
        if frame.kind is FrameKind.QUIT_PROMPT:
            width, height = self.win.size
            self.draw_text(
                frame.question, width / 2.0, height / 2.0,
                style.get('text_colour', 'black'), style, wrap=0.8 * width,
            )
        elif frame.kind in (FrameKind.RESPONSE, FrameKind.CONFIRM):
            if isinstance(frame.geometry, DiscreteScaleGeometry):
                self.draw_discrete(frame, style)
            elif isinstance(frame.geometry, ContinuousScaleGeometry):
                self.draw_continuous(frame, style)
        self.win.flip()

    # =========================================================================
    # SCALE DRAWING (no flip, render() manages refresh)
    # =========================================================================

    def draw_discrete(self, frame: FrameDescriptor, style: StyleConfig) -> None:
        geo: DiscreteScaleGeometry = frame.geometry
        w, h = geo.screen_width, geo.screen_height
        text_col = style.get('text_colour', 'black')
        top = geo.option_rects[0][1]
        bottom = geo.option_rects[0][3]

        self.draw_stimulus_image(frame.image, geo.center_x, top - 0.35 * h, w, h)
        self.draw_text(
            frame.question, geo.center_x, ((top - 0.2 * h) + (bottom - 0.05 * h)) / 2,
            text_col, style, wrap=geo.right - geo.left,
        )
        for i, (x1, y1, x2, y2) in enumerate(geo.option_rects, start=1):
            if i <= len(frame.labels):
                self.draw_text(
                    frame.labels[i - 1], (x1 + x2) / 2, y2 + 0.0625 * h,
                    text_col, style, wrap=(x2 - x1) + 0.2 * w,
                )
            fill = (
                style.get('highlight_colour', 'grey')
                if frame.highlight_index == i
                else style.get('option_colour', 'white')
            )
            line_width = (
                style.get('selected_line_width', 3) if frame.selected_index == i else 1
            )
            visual.Rect(
                self.win, width=x2 - x1, height=y2 - y1,
                pos=self.to_pix((x1 + x2) / 2, (y1 + y2) / 2),
                fillColor=fill, lineColor=text_col, lineWidth=line_width,
                colorSpace=self.colour_space, units='pix',
            ).draw()

        if frame.position is not None:
            visual.Circle(
                self.win, radius=style.get('cursor_size', 15) / 2.0,
                pos=self.to_pix(frame.position, geo.center_y),
                fillColor=style.get('cursor_colour', 'red'), lineColor=None,
                colorSpace=self.colour_space, units='pix',
            ).draw()

        if frame.warning_active and frame.warning_text:
            self.draw_text(
                frame.warning_text, geo.center_x, 0.75 * h,
                style.get('warning_colour', 'red'), style,
            )

    def draw_continuous(self, frame: FrameDescriptor, style: StyleConfig) -> None:
        geo: ContinuousScaleGeometry = frame.geometry
        w, h = geo.screen_width, geo.screen_height
        text_col = style.get('text_colour', 'black')
        line_width = style.get('line_width', 5)

        self.draw_stimulus_image(frame.image, geo.center_x, geo.y - 0.35 * h, w, h)
        self.draw_text(
            frame.question, geo.center_x, geo.y - 0.1 * h,
            text_col, style, wrap=geo.right - geo.left,
        )
        for label, x in zip(frame.labels, (geo.left, geo.right)):
            self.draw_text(label, x, geo.y + 0.1 * h, text_col, style, wrap=0.15 * w)

        band_colours = style.get('band_colours', ['black', 'grey'])
        for x_start, x_end, band in geo.band_segments:
            visual.Line(
                self.win, start=self.to_pix(x_start, geo.y), end=self.to_pix(x_end, geo.y),
                lineColor=band_colours[band], lineWidth=line_width,
                colorSpace=self.colour_space, units='pix',
            ).draw()

        if frame.position is not None:
            slider_h = style.get('slider_height', 15)
            visual.Line(
                self.win,
                start=self.to_pix(frame.position, geo.y - slider_h),
                end=self.to_pix(frame.position, geo.y + slider_h),
                lineColor=style.get('slider_colour', 'red'), lineWidth=line_width,
                colorSpace=self.colour_space, units='pix',
            ).draw()

        if frame.warning_active and frame.warning_text:
            self.draw_text(
                frame.warning_text, geo.center_x, geo.y + 0.15 * h,
                style.get('warning_colour', 'red'), style, wrap=geo.right - geo.left,
            )

    # =========================================================================
    # ATOMIC DRAWING METHODS
    # =========================================================================

    def draw_background(self, style: StyleConfig) -> None:
        width, height = self.win.size
        visual.Rect(
            self.win, width=width, height=height, pos=(0, 0),
            fillColor=style.get('bg_colour', 'white'), lineColor=None,
            colorSpace=self.colour_space, units='pix',
        ).draw()

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        colour: Any,
        style: StyleConfig,
        wrap: Optional[float] = None,
    ) -> None:
        """Draw text centred on a screen-pixel point."""
        if not text:
            return
        visual.TextStim(
            self.win, text=text, pos=self.to_pix(x, y),
            height=style.get('text_height', 32), color=colour,
            colorSpace=self.colour_space, font=style.get('font_main', 'Arial'),
            wrapWidth=wrap, units='pix',
        ).draw()

    def draw_stimulus_image(
        self, image: Optional[str], x: float, y: float, w: float, h: float
    ) -> None:
        """Draw an optional stimulus image, skipped when the file is missing."""
        if not image or not file_exists_nonempty(image):
            return
        disp_w, disp_h = fitted_size_keep_aspect(image, 0.4 * w, 0.25 * h)
        visual.ImageStim(
            self.win, image=resolve_path(image), pos=self.to_pix(x, y),
            size=(disp_w, disp_h), units='pix',
        ).draw()

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def to_pix(self, x: float, y: float) -> tuple[float, float]:
        width, height = self.win.size
        return x - width / 2.0, height / 2.0 - y
