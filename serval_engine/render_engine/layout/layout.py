"""
Block layout engine.
This module builds the box tree from a style tree and computes the
position and size of every block box under the CSS block formatting model.
"""

import logging
from enum import Enum
from typing import Iterator, List, Optional

from ..css import AUTO, LENGTH_ZERO, Length, Unit
from ..errors import LayoutInvariantError
from ..style import DisplayType, StyledNode
from .box_metrics import Dimensions

logger = logging.getLogger(__name__)


class BoxType(Enum):
    """Kinds of box in the layout tree."""
    BLOCK = "block"
    INLINE = "inline"
    ANONYMOUS = "anonymous"


class LayoutBox:
    """
    Represents a box in the layout tree.

    Block and inline boxes refer to the styled node they were generated
    from. Anonymous blocks are synthetic wrappers around runs of inline
    children and have no styled node.
    """

    def __init__(self, box_type: BoxType, style_node: Optional[StyledNode] = None):
        """
        Initialize a layout box.

        Args:
            box_type: The kind of box
            style_node: The styled node; must be None for anonymous blocks
        """
        if (box_type is BoxType.ANONYMOUS) != (style_node is None):
            raise LayoutInvariantError("Only anonymous blocks are created without a styled node")

        self.box_type = box_type
        self.style_node = style_node
        self.dimensions = Dimensions()
        self.children: List['LayoutBox'] = []

    @classmethod
    def for_styled_node(cls, style_node: StyledNode) -> 'LayoutBox':
        """
        Create the box generated by a styled node.

        Args:
            style_node: A node whose display is block or inline

        Returns:
            The new, empty layout box
        """
        display = style_node.display()
        if display is DisplayType.BLOCK:
            return cls(BoxType.BLOCK, style_node)
        if display is DisplayType.INLINE:
            return cls(BoxType.INLINE, style_node)
        raise LayoutInvariantError(
            f"{style_node.node.simple_name()} has display: none and generates no box")

    @classmethod
    def anonymous(cls) -> 'LayoutBox':
        return cls(BoxType.ANONYMOUS)

    def get_style_node(self) -> StyledNode:
        """
        Get the styled node of a block or inline box.

        Raises:
            LayoutInvariantError: If called on an anonymous block
        """
        if self.style_node is None:
            raise LayoutInvariantError("Anonymous block has no style node")
        return self.style_node

    def get_inline_container(self) -> 'LayoutBox':
        """
        Get the box new inline children should be appended to.

        Inline boxes and anonymous blocks hold inline children themselves. A
        block box reuses its trailing anonymous block, or appends a new one,
        so that each run of consecutive inline children shares one wrapper.

        Returns:
            The inline container
        """
        if self.box_type is not BoxType.BLOCK:
            return self

        if not self.children or self.children[-1].box_type is not BoxType.ANONYMOUS:
            self.children.append(LayoutBox.anonymous())
        return self.children[-1]

    def walk(self) -> Iterator['LayoutBox']:
        """Yield this box and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    # Layout

    def layout(self, containing_block: Dimensions) -> Dimensions:
        """
        Lay out this box and its descendants.

        Only block layout is implemented. Inline and anonymous boxes reached
        as children are left unpositioned with zero dimensions, as long as no
        block box sits inside them.

        Args:
            containing_block: Dimensions of the containing block; its content
                height is where this box starts vertically

        Returns:
            The fully computed dimensions of this box

        Raises:
            NotImplementedError: If this box is inline or anonymous, or a block
                box is nested inside an inline or anonymous descendant
        """
        if self.box_type is not BoxType.BLOCK:
            raise NotImplementedError(f"Layout of {self.label()} boxes is not implemented")

        self._layout(containing_block)
        return self.dimensions

    def _layout(self, containing_block: Dimensions) -> None:
        logger.debug(f"layout: {self.label()} {self.dimensions}")
        if self.box_type is BoxType.BLOCK:
            self.layout_block(containing_block)
        elif any(box.box_type is BoxType.BLOCK for box in self.walk()):
            raise NotImplementedError(
                f"Layout of a block box inside {self.label()} is not implemented")
        else:
            logger.debug(f"Skipping layout of {self.label()} box")

    def layout_block(self, containing_block: Dimensions) -> None:
        """
        Lay out a block box.

        The steps run in a fixed order: width before position, position
        before children, children before height.

        Args:
            containing_block: Dimensions of the containing block
        """
        # Child width can depend on parent width
        self.calculate_block_width(containing_block)

        # Determine where the box is located within its container
        self.calculate_block_position(containing_block)

        self.layout_block_children()

        # Parent height can depend on child height
        self.calculate_block_height()

    def calculate_block_width(self, containing_block: Dimensions) -> None:
        """
        Compute the content width and horizontal edges of a block box.

        Args:
            containing_block: Dimensions of the containing block
        """
        style = self.get_style_node()

        width = style.value('width')
        if width is None:
            width = AUTO

        margin_left = style.lookup('margin-left', 'margin', LENGTH_ZERO)
        margin_right = style.lookup('margin-right', 'margin', LENGTH_ZERO)

        border_left = style.lookup('border-left-width', 'border-width', LENGTH_ZERO)
        border_right = style.lookup('border-right-width', 'border-width', LENGTH_ZERO)

        padding_left = style.lookup('padding-left', 'padding', LENGTH_ZERO)
        padding_right = style.lookup('padding-right', 'padding', LENGTH_ZERO)

        total = sum(value.to_px() for value in (
            margin_left, margin_right, border_left, border_right,
            padding_left, padding_right, width,
        ))

        # Too wide for the container: auto margins collapse to zero
        if width != AUTO and total > containing_block.content.width:
            if margin_left == AUTO:
                margin_left = LENGTH_ZERO
            if margin_right == AUTO:
                margin_right = LENGTH_ZERO

        underflow = containing_block.content.width - total

        d = self.dimensions
        d.padding.left = padding_left.to_px()
        d.padding.right = padding_right.to_px()
        d.border.left = border_left.to_px()
        d.border.right = border_right.to_px()

        width_auto = width == AUTO
        margin_left_auto = margin_left == AUTO
        margin_right_auto = margin_right == AUTO

        if not width_auto and not margin_left_auto and not margin_right_auto:
            # Over-constrained: the right margin absorbs the difference
            d.content.width = width.to_px()
            d.margin.left = margin_left.to_px()
            d.margin.right = margin_right.to_px() + underflow

        elif not width_auto and not margin_left_auto and margin_right_auto:
            d.content.width = width.to_px()
            d.margin.left = margin_left.to_px()
            d.margin.right = underflow

        elif not width_auto and margin_left_auto and not margin_right_auto:
            d.content.width = width.to_px()
            d.margin.left = underflow
            d.margin.right = margin_right.to_px()

        elif not width_auto:
            # Both margins auto: center the box
            d.content.width = width.to_px()
            d.margin.left = underflow / 2.0
            d.margin.right = underflow / 2.0

        else:
            # Width auto: remaining auto margins become zero
            if margin_left_auto:
                margin_left = LENGTH_ZERO
            if margin_right_auto:
                margin_right = LENGTH_ZERO

            if underflow >= 0.0:
                d.content.width = underflow
                d.margin.left = margin_left.to_px()
                d.margin.right = margin_right.to_px()
            else:
                # Width can't be negative; the right margin takes the overflow
                d.content.width = 0.0
                d.margin.left = margin_left.to_px()
                d.margin.right = margin_right.to_px() + underflow

    def calculate_block_position(self, containing_block: Dimensions) -> None:
        """
        Compute the vertical edges and the content position of a block box.

        The box is placed below everything already laid out in the
        containing block, whose content height grows as children are added.

        Args:
            containing_block: Dimensions of the containing block
        """
        style = self.get_style_node()
        d = self.dimensions

        # Vertical auto margins are treated as zero
        d.margin.top = style.lookup('margin-top', 'margin', LENGTH_ZERO).to_px()
        d.margin.bottom = style.lookup('margin-bottom', 'margin', LENGTH_ZERO).to_px()

        d.border.top = style.lookup('border-top-width', 'border-width', LENGTH_ZERO).to_px()
        d.border.bottom = style.lookup('border-bottom-width', 'border-width', LENGTH_ZERO).to_px()

        d.padding.top = style.lookup('padding-top', 'padding', LENGTH_ZERO).to_px()
        d.padding.bottom = style.lookup('padding-bottom', 'padding', LENGTH_ZERO).to_px()

        d.content.x = containing_block.content.x + d.margin.left + d.border.left + d.padding.left

        d.content.y = (containing_block.content.y + containing_block.content.height
                       + d.margin.top + d.border.top + d.padding.top)

    def layout_block_children(self) -> None:
        """
        Lay out the children one after another, growing the content height
        by each child's margin box before the next child is placed.
        """
        d = self.dimensions
        d.content.height = 0.0
        for child in self.children:
            child._layout(d)
            d.content.height += child.dimensions.margin_box().height

    def calculate_block_height(self) -> None:
        """Apply an explicit pixel height over the children-driven height."""
        height = self.get_style_node().value('height')
        if isinstance(height, Length) and height.unit is Unit.PX:
            self.dimensions.content.height = height.amount

    # Debug output

    def label(self) -> str:
        if self.box_type is BoxType.ANONYMOUS:
            return "(anonymous)"
        # Collapse whitespace so text labels stay on one line
        name = " ".join(self.style_node.node.simple_name().split())
        return f"{name}({self.box_type.value})"

    def dump(self, indent: int = 0) -> str:
        """
        Render the box tree as indented text, one box per line.

        Args:
            indent: Number of spaces before this box's line

        Returns:
            The dump, without a trailing newline
        """
        lines = [f"{' ' * indent}{self.label()} {self.dimensions}"]
        lines.extend(child.dump(indent + 2) for child in self.children)
        return "\n".join(lines)

    def __str__(self):
        return f"{self.label()} {self.dimensions}"

    def __repr__(self):
        return f"LayoutBox({self.label()}, {len(self.children)} children)"


def build_layout_tree(style_node: StyledNode) -> LayoutBox:
    """
    Build the box tree for a style tree.

    Nodes with ``display: none`` are dropped together with their subtrees.
    Block children are appended directly; inline children go to the
    parent's inline container.

    Args:
        style_node: Root of the style tree; must not have display none

    Returns:
        The root layout box

    Raises:
        LayoutInvariantError: If the root has display none
    """
    root = LayoutBox.for_styled_node(style_node)
    for child in style_node.children:
        display = child.display()
        if display is DisplayType.BLOCK:
            root.children.append(build_layout_tree(child))
        elif display is DisplayType.INLINE:
            root.get_inline_container().children.append(build_layout_tree(child))
    return root


def layout_tree(style_node: StyledNode, containing_block: Dimensions) -> LayoutBox:
    """
    Build and lay out the box tree for a style tree.

    Args:
        style_node: Root of the style tree
        containing_block: The initial containing block

    Returns:
        The laid out root box
    """
    root = build_layout_tree(style_node)
    root.layout(containing_block)
    return root
