"""
ordtree/clinic.py
Priority patient dispatcher built on RedBlackTree.

Script format (whitespace separated, first token is the command count):
  0 NAME SEVERITY   admit a patient
  1 NAME DELTA      add DELTA to a waiting patient's severity
  2 NAME            discharge a waiting patient
  3                 print the patient to treat next

Ordering: higher severity first; ties go to the earlier arrival.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from ordtree.rbtree import RedBlackTree

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "The clinic is empty"


@dataclass(eq=False)
class Patient:
    name: str
    severity: int
    arrival: int


def compare_patients(a: Patient, b: Patient) -> int:
    if a.severity != b.severity:
        return b.severity - a.severity  # higher severity first
    return a.arrival - b.arrival


class Clinic:
    """
    Waiting room: a RedBlackTree of Patients plus a name → Patient index.

    The tree holds references to the same Patient objects as the index,
    so a retriage must take the patient out of the tree before changing
    its severity.
    """

    def __init__(self) -> None:
        self._queue = RedBlackTree(compare_patients)
        self._by_name: dict[str, Patient] = {}
        self._arrivals = 0

    def admit(self, name: str, severity: int) -> Patient:
        patient = Patient(name, severity, self._arrivals)
        self._arrivals += 1
        self._queue.insert(patient)
        self._by_name[name] = patient
        return patient

    def retriage(self, name: str, delta: int) -> bool:
        """Change a waiting patient's severity. Returns False if unknown."""
        patient = self._by_name.get(name)
        if patient is None:
            logger.debug("retriage of unknown patient %r ignored", name)
            return False
        self._queue.delete(patient)
        patient.severity += delta
        self._queue.insert(patient)
        return True

    def discharge(self, name: str) -> bool:
        """Remove a waiting patient. Returns False if unknown."""
        patient = self._by_name.pop(name, None)
        if patient is None:
            logger.debug("discharge of unknown patient %r ignored", name)
            return False
        self._queue.delete(patient)
        return True

    def next_patient(self) -> str | None:
        """Name of the patient to treat next, or None when nobody waits."""
        if self._queue.empty():
            return None
        return self._queue.min().name

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name


# ── Script commands ──────────────────────────────────────────────────

@dataclass
class Admit:
    name: str
    severity: int


@dataclass
class Retriage:
    name: str
    delta: int


@dataclass
class Discharge:
    name: str


@dataclass
class Dispatch:
    pass


Command = Admit | Retriage | Discharge | Dispatch


class ScriptError(Exception):
    pass


class _Reader:
    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self._pos = 0

    def word(self, what: str, cmd_no: int) -> str:
        if self._pos >= len(self._tokens):
            raise ScriptError(f"command {cmd_no}: expected {what}, got end of input")
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def number(self, what: str, cmd_no: int) -> int:
        tok = self.word(what, cmd_no)
        try:
            return int(tok)
        except ValueError:
            raise ScriptError(f"command {cmd_no}: expected {what}, got {tok!r}") from None


def parse_script(text: str) -> list[Command]:
    """Parse a dispatcher script into a list of commands."""
    reader = _Reader(text)
    count = reader.number("command count", 0)
    if count < 0:
        raise ScriptError(f"command count must be >= 0, got {count}")

    commands: list[Command] = []
    for cmd_no in range(1, count + 1):
        op = reader.number("opcode", cmd_no)
        if op == 0:
            name = reader.word("name", cmd_no)
            commands.append(Admit(name, reader.number("severity", cmd_no)))
        elif op == 1:
            name = reader.word("name", cmd_no)
            commands.append(Retriage(name, reader.number("delta", cmd_no)))
        elif op == 2:
            commands.append(Discharge(reader.word("name", cmd_no)))
        elif op == 3:
            commands.append(Dispatch())
        else:
            raise ScriptError(f"command {cmd_no}: unknown opcode {op}")
    return commands


def execute(clinic: Clinic, commands: list[Command]) -> list[str]:
    """Apply commands to clinic; return one output line per Dispatch."""
    out: list[str] = []
    for cmd in commands:
        if isinstance(cmd, Admit):
            clinic.admit(cmd.name, cmd.severity)
        elif isinstance(cmd, Retriage):
            clinic.retriage(cmd.name, cmd.delta)
        elif isinstance(cmd, Discharge):
            clinic.discharge(cmd.name)
        elif isinstance(cmd, Dispatch):
            name = clinic.next_patient()
            out.append(name if name is not None else EMPTY_MESSAGE)
        else:
            raise ScriptError(f"Unsupported command type: {type(cmd)}")
    return out


def run_script(text: str) -> list[str]:
    """Parse and run a whole script against a fresh Clinic."""
    return execute(Clinic(), parse_script(text))
