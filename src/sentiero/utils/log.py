from colorama import Fore, Style

status_colors = {
    range(100, 200): Fore.CYAN,
    range(200, 300): Fore.GREEN,
    range(300, 400): Fore.YELLOW,
    range(400, 500): Fore.RED,
    range(500, 600): Fore.MAGENTA,
}


def stat_color(status_code: int) -> str:
    for code_range, code_color in status_colors.items():
        if status_code in code_range:
            return code_color
    return Fore.WHITE


def access_line(client: str, method: str, path: str, status_code: int, reason: str) -> str:
    return (
        f'{client} - "{Style.BRIGHT}{Fore.WHITE}{method} {path}{Style.RESET_ALL}" '
        f"{stat_color(status_code)}{status_code} {reason}{Fore.RESET}"
    )
