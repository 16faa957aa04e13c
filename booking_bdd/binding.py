# booking_bdd/binding.py
"""
Enlace entre las frases de Gherkin y las funciones de paso.

Los decoradores given/when/then de este módulo registran cada frase en un
StepRegistry. pytest-bdd solo ve los pasos comodín del plugin, que le piden al
registro la definición más específica para cada frase. El registro también
comprueba TODOS los ficheros .feature antes de ejecutar el primer escenario: un
paso sin definición o con dos definiciones igual de específicas es un error de
configuración, no un fallo del escenario.
"""
import inspect
import logging
import re
from pathlib import Path

import parse
from gherkin.parser import Parser
from pytest_bdd import parsers

from booking_bdd.errors import BindingError

logger = logging.getLogger(__name__)

GIVEN, WHEN, THEN = "given", "when", "then"

# keywordType del parser oficial de Gherkin
_KEYWORD_TYPES = {"Context": GIVEN, "Action": WHEN, "Outcome": THEN}

_OUTLINE_PARAM = re.compile(r"<([^<>]+)>")


class StepDefinition:

    def __init__(self, keyword: str, pattern: str, func):
        self.keyword = keyword
        self.pattern = pattern
        self.func = func
        self.parser = parsers.parse(pattern)
        compiled = parse.compile(pattern)
        # Una frase literal (0 huecos) es la más específica
        self.placeholders = len(compiled.named_fields) + len(compiled.fixed_fields)

    def matches(self, text: str) -> bool:
        return self.parser.is_matching(text)

    def __repr__(self):
        return f"StepDefinition({self.keyword!r}, {self.pattern!r})"


class FeatureStep:
    """Un paso tal y como aparece en un .feature, con su tipo ya resuelto."""

    def __init__(self, path, line: int, keyword: str, text: str):
        self.path = path
        self.line = line
        self.keyword = keyword
        self.text = text

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}"


def _step_keyword(step: dict, previous: str):
    keyword = _KEYWORD_TYPES.get(step.get("keywordType"))
    if keyword:
        return keyword
    # And / But / * heredan el tipo del paso anterior
    word = step["keyword"].strip().lower()
    if word in (GIVEN, WHEN, THEN):
        return word
    return previous


def _example_rows(scenario: dict):
    rows = []
    for examples in scenario.get("examples", []):
        header = [cell["value"] for cell in (examples.get("tableHeader") or {}).get("cells", [])]
        for row in examples.get("tableBody", []):
            rows.append(dict(zip(header, (cell["value"] for cell in row["cells"]))))
    return rows or [{}]


def _render(text: str, params: dict) -> str:
    return _OUTLINE_PARAM.sub(lambda m: params.get(m.group(1), m.group(0)), text)


def _block_steps(path, steps, previous, params=None):
    found = []
    for step in steps:
        previous = _step_keyword(step, previous)
        text = _render(step["text"], params) if params else step["text"]
        found.append(FeatureStep(path, step["location"]["line"], previous, text))
    return found, previous


def _children_steps(path, children):
    found = []
    background_keyword = None
    for child in children:
        if "background" in child:
            background_steps, background_keyword = _block_steps(path, child["background"]["steps"], None)
            found.extend(background_steps)
        elif "rule" in child:
            found.extend(_children_steps(path, child["rule"].get("children", [])))
        elif "scenario" in child:
            scenario = child["scenario"]
            for params in _example_rows(scenario):
                steps, _ = _block_steps(path, scenario["steps"], background_keyword, params)
                found.extend(steps)
    return found


def feature_steps(path) -> list:
    """Lee un .feature y devuelve sus pasos (los Scenario Outline, ya renderizados)."""
    document = Parser().parse(Path(path).read_text(encoding="utf-8"))
    feature = document.get("feature")
    if not feature:
        return []
    return _children_steps(path, feature.get("children", []))


def find_feature_files(directory) -> list:
    return sorted(Path(directory).rglob("*.feature"))


class StepRegistry:

    def __init__(self):
        self.definitions = []

    def register(self, keyword: str, pattern: str, func) -> StepDefinition:
        for existing in self.definitions:
            if existing.keyword == keyword and existing.pattern == pattern:
                raise BindingError([
                    f"'{keyword.capitalize()} {pattern}' ya está definido en {existing.func.__name__}"
                ])
        definition = StepDefinition(keyword, pattern, func)
        self.definitions.append(definition)
        return definition

    def bind(self, keyword: str, pattern: str):
        def decorator(func):
            self.register(keyword, pattern, func)
            return func

        return decorator

    def candidates(self, keyword: str, text: str) -> list:
        return [d for d in self.definitions if d.keyword == keyword and d.matches(text)]

    def _resolve(self, keyword, text):
        found = self.candidates(keyword, text)
        if not found:
            return None, f"Paso sin definición: {str(keyword).capitalize()} {text}"
        fewest = min(d.placeholders for d in found)
        best = [d for d in found if d.placeholders == fewest]
        if len(best) > 1:
            patterns = ", ".join(repr(d.pattern) for d in best)
            return None, f"Paso ambiguo: {keyword.capitalize()} {text} coincide con {patterns}"
        return best[0], None

    def resolve(self, keyword: str, text: str) -> StepDefinition:
        """Devuelve la definición más específica para el paso o lanza BindingError."""
        definition, problem = self._resolve(keyword, text)
        if problem:
            raise BindingError([problem])
        return definition

    def dispatch(self, keyword: str, text: str, getfixturevalue):
        """
        Ejecuta la definición más específica para el paso.

        Los argumentos de la función salen de la frase ({status_code:d}, "{name}")
        y, si no están en ella, de las fixtures de pytest con ese nombre.
        """
        definition = self.resolve(keyword, text)
        arguments = definition.parser.parse_arguments(text) or {}
        kwargs = {
            name: arguments[name] if name in arguments else getfixturevalue(name)
            for name in inspect.signature(definition.func).parameters
        }
        return definition.func(**kwargs)

    def validate(self, feature_paths):
        problems = []
        checked = 0
        for path in feature_paths:
            for step in feature_steps(path):
                checked += 1
                _, problem = self._resolve(step.keyword, step.text)
                if problem:
                    problems.append(f"{step.location}: {problem}")
        if problems:
            # Un Scenario Outline repite el mismo problema por cada fila de Examples
            raise BindingError(dict.fromkeys(problems))
        logger.debug("%d pasos enlazados correctamente", checked)


REGISTRY = StepRegistry()


def given(pattern: str):
    return REGISTRY.bind(GIVEN, pattern)


def when(pattern: str):
    return REGISTRY.bind(WHEN, pattern)


def then(pattern: str):
    return REGISTRY.bind(THEN, pattern)
