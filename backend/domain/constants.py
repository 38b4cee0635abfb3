"""
Game constants for the snake decision engine.
"""

# Movement directions
UP = "UP"
LEFT = "LEFT"
DOWN = "DOWN"
RIGHT = "RIGHT"
VALID_MOVES = {UP, LEFT, DOWN, RIGHT}

# Fixed evaluation order; ties between equally scored moves go to the earlier one.
DIRECTION_ORDER = (UP, LEFT, DOWN, RIGHT)

# Integer codes returned to the host
MOVE_CODES = {UP: 0, LEFT: 1, DOWN: 2, RIGHT: 3}
CODE_MOVES = {code: move for move, code in MOVE_CODES.items()}

# Up => y + 1, Down => y - 1
OFFSETS = {
    UP: (0, 1),
    LEFT: (-1, 0),
    DOWN: (0, -1),
    RIGHT: (1, 0),
}

# Wire format
SENTINEL = -1
MAX_SEGMENTS = 4
SEGMENT_BLOCK_WIDTH = 2 * MAX_SEGMENTS

# The pathfinding primitive always plays on an 8x8 board.
PATHFINDING_BOARD_SIZE = 8
UNREACHABLE = -1
