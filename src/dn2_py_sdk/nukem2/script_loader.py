"""Parser for the game's text script bundles (`TEXT.MNI`, `HELP.MNI`, ...).

A bundle is a sequence of named scripts::

    Episode_End_1
    //FADEOUT
    //LOADRAW END1.MNI
    //FADEIN
    //XYTEXT 2 10 Well done!
    //WAIT
    //END

A bare line names the next script; `//END` closes it. Every line inside a
script is a `//COMMAND` with whitespace separated arguments. `//XYTEXT`
and `//CWTEXT` take the rest of the line as text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from ..errors import FormatError


@dataclass(frozen=True, slots=True)
class Delay:
    ticks: int


@dataclass(frozen=True, slots=True)
class FadeIn:
    pass


@dataclass(frozen=True, slots=True)
class FadeOut:
    pass


@dataclass(frozen=True, slots=True)
class ShowFullScreenImage:
    image: str


@dataclass(frozen=True, slots=True)
class SetPalette:
    palette_file: str


@dataclass(frozen=True, slots=True)
class AnimateNewsReporter:
    talk_duration: int


@dataclass(frozen=True, slots=True)
class StopNewsReporterAnimation:
    pass


@dataclass(frozen=True, slots=True)
class ShowMenuSelectionIndicator:
    y_pos: int


@dataclass(frozen=True, slots=True)
class DrawText:
    x: int
    y: int
    text: str


@dataclass(frozen=True, slots=True)
class DrawCenteredText:
    text: str


@dataclass(frozen=True, slots=True)
class ShowMessageBox:
    y: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class ConfigurePersistentMenuSelection:
    slot: int


@dataclass(frozen=True, slots=True)
class ScheduleFadeInBeforeNextWaitState:
    pass


@dataclass(frozen=True, slots=True)
class DisableMenuFunctionality:
    pass


@dataclass(frozen=True, slots=True)
class ShowKeyBindings:
    pass


@dataclass(frozen=True, slots=True)
class ShowSaveSlots:
    selected_slot: int


@dataclass(frozen=True, slots=True)
class SetupCheckBoxes:
    x_pos: int
    check_box_ids: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class WaitForUserInput:
    pass


@dataclass(frozen=True, slots=True)
class EnableTextOffset:
    pass


@dataclass(frozen=True, slots=True)
class EnableTimeOutToDemo:
    pass


@dataclass(frozen=True, slots=True)
class PagesDefinition:
    pages: tuple[tuple["Statement", ...], ...]


Statement = Union[
    Delay,
    FadeIn,
    FadeOut,
    ShowFullScreenImage,
    SetPalette,
    AnimateNewsReporter,
    StopNewsReporterAnimation,
    ShowMenuSelectionIndicator,
    DrawText,
    DrawCenteredText,
    ShowMessageBox,
    ConfigurePersistentMenuSelection,
    ScheduleFadeInBeforeNextWaitState,
    DisableMenuFunctionality,
    ShowKeyBindings,
    ShowSaveSlots,
    SetupCheckBoxes,
    WaitForUserInput,
    EnableTextOffset,
    EnableTimeOutToDemo,
    PagesDefinition,
]

Script = list[Statement]
ScriptBundle = dict[str, Script]


def _ints(command: str, args: list[str], count: int) -> list[int]:
    if len(args) != count:
        raise FormatError(f"//{command} expects {count} argument(s), got {len(args)}")
    try:
        return [int(a) for a in args]
    except ValueError as e:
        raise FormatError(f"//{command} expects integer arguments, got {args!r}") from e


def _one_word(command: str, args: list[str]) -> str:
    if len(args) != 1:
        raise FormatError(f"//{command} expects 1 argument, got {len(args)}")
    return args[0]


def _no_args(factory: Callable[[], Statement]) -> Callable[[str, list[str], str], Statement]:
    def parse(command: str, args: list[str], _rest: str) -> Statement:
        if args:
            raise FormatError(f"//{command} takes no arguments")
        return factory()

    return parse


def _parse_xy_text(command: str, args: list[str], rest: str) -> Statement:
    parts = rest.split(None, 2)
    if len(parts) < 2:
        raise FormatError(f"//{command} expects x y and text")
    x, y = _ints(command, parts[:2], 2)
    return DrawText(x=x, y=y, text=parts[2] if len(parts) > 2 else "")


def _parse_check_boxes(command: str, args: list[str], _rest: str) -> Statement:
    values = _ints(command, args, len(args))
    if not values:
        raise FormatError(f"//{command} expects an x position")
    return SetupCheckBoxes(x_pos=values[0], check_box_ids=tuple(values[1:]))


_COMMANDS: dict[str, Callable[[str, list[str], str], Statement]] = {
    "DELAY": lambda c, a, r: Delay(*_ints(c, a, 1)),
    "FADEIN": _no_args(FadeIn),
    "FADEOUT": _no_args(FadeOut),
    "LOADRAW": lambda c, a, r: ShowFullScreenImage(_one_word(c, a)),
    "GETPAL": lambda c, a, r: SetPalette(_one_word(c, a)),
    "BABBLEON": lambda c, a, r: AnimateNewsReporter(*_ints(c, a, 1)),
    "BABBLEOFF": _no_args(StopNewsReporterAnimation),
    "Z": lambda c, a, r: ShowMenuSelectionIndicator(*_ints(c, a, 1)),
    "XYTEXT": _parse_xy_text,
    "CWTEXT": lambda c, a, r: DrawCenteredText(r),
    "CENTERWINDOW": lambda c, a, r: ShowMessageBox(*_ints(c, a, 3)),
    "MENU": lambda c, a, r: ConfigurePersistentMenuSelection(*_ints(c, a, 1)),
    "FADEINBEFOREWAIT": _no_args(ScheduleFadeInBeforeNextWaitState),
    "NOSOUNDS": _no_args(DisableMenuFunctionality),
    "KEYS": _no_args(ShowKeyBindings),
    "GETNAMES": lambda c, a, r: ShowSaveSlots(*_ints(c, a, 1)),
    "TOGGS": _parse_check_boxes,
    "WAIT": _no_args(WaitForUserInput),
    "PAK": _no_args(WaitForUserInput),
    "SHIFTWIN": _no_args(EnableTextOffset),
    "EXITTODEMO": _no_args(EnableTimeOutToDemo),
}


@dataclass(slots=True)
class _PagesBuilder:
    pages: list[list[Statement]] = field(default_factory=list)

    def new_page(self) -> None:
        self.pages.append([])

    def add(self, statement: Statement) -> None:
        if not self.pages:
            self.new_page()
        self.pages[-1].append(statement)

    def build(self) -> PagesDefinition:
        return PagesDefinition(pages=tuple(tuple(p) for p in self.pages))


def _split_command(line: str) -> tuple[str, list[str], str]:
    body = line[2:]
    head, _, rest = body.partition(" ")
    return head.strip().upper(), rest.split(), rest.strip()


def parse_script_bundle(text: str) -> ScriptBundle:
    bundle: ScriptBundle = {}
    current_name: str | None = None
    current: Script = []
    pages: _PagesBuilder | None = None

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if current_name is None:
            if line.startswith("//"):
                raise FormatError(f"line {line_no}: command outside of a script")
            if line in bundle:
                raise FormatError(f"line {line_no}: script {line!r} defined twice")
            current_name = line
            current = []
            continue

        if not line.startswith("//"):
            raise FormatError(f"line {line_no}: expected a //command in script {current_name!r}")

        command, args, rest = _split_command(line)
        if command == "END":
            if pages is not None:
                raise FormatError(f"line {line_no}: //END inside //PAGESSTART")
            bundle[current_name] = current
            current_name = None
        elif command == "PAGESSTART":
            if pages is not None:
                raise FormatError(f"line {line_no}: nested //PAGESSTART")
            pages = _PagesBuilder()
        elif command == "APAGE":
            if pages is None:
                raise FormatError(f"line {line_no}: //APAGE outside //PAGESSTART")
            pages.new_page()
        elif command == "PAGESEND":
            if pages is None:
                raise FormatError(f"line {line_no}: //PAGESEND without //PAGESSTART")
            current.append(pages.build())
            pages = None
        else:
            parser = _COMMANDS.get(command)
            if parser is None:
                raise FormatError(f"line {line_no}: unknown command //{command}")
            statement = parser(command, args, rest)
            if pages is not None:
                pages.add(statement)
            else:
                current.append(statement)

    if current_name is not None:
        raise FormatError(f"script {current_name!r} is missing //END")

    return bundle


def decode_script_text(data: bytes) -> str:
    return data.decode("cp437")
