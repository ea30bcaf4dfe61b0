"""Abstract player interface for human or automatic controllers."""

from .engine.position import parse_position

UNDO = "undo"


class Player:
    automatic = False

    def __init__(self, color):
        self.color = color

    def next_move(self, game, deadline=None):
        """Return a Position (or the UNDO command) for the next move within the time limit."""
        raise NotImplementedError


def parse_command(raw):
    """Turn a line of text input into a Position or the UNDO command."""
    if raw.strip().lower() in ("u", "undo"):
        return UNDO
    return parse_position(raw)


class HumanPlayer(Player):
    def __init__(self, color):
        super().__init__(color)

    def next_move(self, game, deadline=None):
        """Text-input player with deadline guard (raises TimeoutError on timeout)."""
        import os
        import sys
        import time

        prompt = "Enter move as 'x y' (1-indexed) or 'u' to undo: "
        if deadline is None:
            raw = input(prompt).strip()
        else:
            remaining = deadline - time.time()
            if remaining <= 0:
                raise TimeoutError("Move exceeded allotted time")

            sys.stdout.write(prompt)
            sys.stdout.flush()
            if os.name == "nt":
                # Windows: select() on stdin is not supported. Poll with msvcrt.
                import msvcrt

                buffer = ""
                while time.time() < deadline:
                    if msvcrt.kbhit():
                        ch = msvcrt.getwche()
                        if ch in ("\r", "\n"):
                            sys.stdout.write("\n")
                            break
                        buffer += ch
                    time.sleep(0.01)
                else:
                    raise TimeoutError("Move exceeded allotted time")
                raw = buffer.strip()
            else:
                import select

                rlist, _, _ = select.select([sys.stdin], [], [], remaining)
                if not rlist:
                    raise TimeoutError("Move exceeded allotted time")
                raw = sys.stdin.readline().strip()

        return parse_command(raw)


class GuiHumanPlayer(Player):
    def __init__(self, color, view):
        super().__init__(color)
        self.view = view

    def next_move(self, game, deadline=None):
        """Block on mouse input; the view raises TimeoutError past the deadline."""
        return self.view.wait_for_move(game, deadline, self.color)
