from typing import Callable


class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'
    RESET = '\033[0m'


def print_colored(text: str, color: str = Colors.RESET) -> None:
    print(f"{color}{text}{Colors.RESET}")


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in ('y', 'yes')


def get_user_confirmation(prompt: str, ask: Callable[[str], str] = input) -> bool:
    """Ask a single yes/no question. Anything but yes/y, or end of input, is a no."""
    try:
        response = ask(f"{prompt} (yes/no): ")
    except EOFError:
        return False
    return is_affirmative(response)
