# scicalc

The engine of a scientific calculator. It turns keypad input into numbers,
samples functions of `x` for plotting, keeps a history of calculations in
SQLite and converts between currencies using daily exchange rates published
as XML.

## Modules

- `scicalc.parser`: `tokenize` splits an expression into `Token`s and
  `infix_to_postfix` reorders them for evaluation. It handles numbers with
  exponents, unary minus, the constants `π` and `e`, the variable `x`, the
  operators `+ - * / % ^ !` and the functions `sin`, `cos`, `tan`, `ln`,
  `log`, `sqrt`, `abs`, `arcsin`, `arccos` and `arctan`. Malformed input
  raises `ExpressionError`.
- `scicalc.evaluator`: `evaluate_arithmetic` evaluates expressions without
  `x`, `evaluate_function` evaluates a function of `x` at a given value, and
  `generate_points` samples a function over an interval. With
  `degrees=True` the trigonometric functions take degrees and the inverse
  ones return degrees. Division by zero, `ln`/`log` of a non-positive number,
  `sqrt` of a negative number, `arcsin`/`arccos` outside [-1, 1] and a
  factorial of a negative or non-integer value raise `EvaluationError`
  (a subclass of `ExpressionError`). `contains_variable` tells whether an
  expression uses `x`.
- `scicalc.calculator`: `Calculator` holds the expression being typed, a live
  preview of its value and an error state. `prepare_expression` strips
  trailing operators and closes open parentheses. `format_result` prints
  whole numbers without a fraction and other values with 17 significant
  digits.
- `scicalc.plot`: `plot_points` returns `{"x": ..., "y": ...}` points of a
  function and leaves out the points where it is undefined or not finite.
- `scicalc.db`: `Database` opens an SQLite file and creates the tables.
  It can be used as a context manager that closes the connection. Failures
  raise `DatabaseError`.
- `scicalc.models`: the `CalculationEntity` and `CurrencyEntity` records.
- `scicalc.repositories`: `CalculationRepository` and `CurrencyRepository`
  read and write those records.
- `scicalc.history`: `HistoryManager` is a newest-first list of stored
  calculations. It supports `len`, indexing and iteration.
- `scicalc.currency`: `CurrencyManager` parses daily rate XML
  (`Valute` / `CharCode` / `Name` / `Nominal` / `Value`), stores the rates
  and converts amounts through the rouble.

## Installation

The package uses only the standard library and needs Python 3.10 or later.
The `test` extra adds pytest.

## Usage

### Evaluating expressions

```python
from scicalc.evaluator import evaluate_arithmetic, evaluate_function, EvaluationError
from scicalc.calculator import format_result

print(format_result(evaluate_arithmetic("2+3*4")))   # 14
evaluate_function("x^2+1", 3)                        # 10.0
evaluate_arithmetic("sin(90)", degrees=True)         # 1.0

try:
    evaluate_arithmetic("1/0")
except EvaluationError as err:
    print("error:", err)
```

### Driving a calculator

```python
from scicalc.calculator import Calculator

def on_calculation(expression, result):
    print(expression, "=", result)

def on_plot_requested(expression):
    print("plot", expression)

calc = Calculator(on_calculation, on_plot_requested)
calc.append_digit("1")
calc.append_digit("2")
calc.append_operator("+")
calc.append_function("sqrt")
calc.append_digit("9")
print(calc.preview_result)         # 15
calc.calculate()                   # prints: 12+sqrt(9) = 15
```

When the expression contains `x`, `request_plot()` passes the completed
expression to `on_plot_requested`. It also reports it to `on_calculation`
with the result `"Function"`. `calculate()` on such an expression sets
`has_error` and `error_message` instead. `toggle_angle_mode()` switches
between radians and degrees.

### Plot data

```python
from scicalc.plot import plot_points

points = plot_points("sin(x)", -3.14, 3.14, 200)
```

An empty list comes back when fewer than two points are asked for, when
`x_min >= x_max`, or when the expression cannot be parsed.

### History and currency rates

```python
from scicalc.db import Database
from scicalc.repositories import CalculationRepository, CurrencyRepository
from scicalc.history import HistoryManager
from scicalc.currency import CurrencyManager

with Database() as database:
    database.initialize("calculator.db")

    history = HistoryManager(CalculationRepository(database))
    history.add_calculation("2+2", "4")
    for entry in history:
        print(entry.expression, entry.result)

    def fetch(url):
        with open("daily.xml", "rb") as handle:
            return handle.read()

    rates = CurrencyManager(CurrencyRepository(database), fetch)
    rates.initialize()
    print(rates.currencies())
    print(rates.convert("USD", "EUR", 100.0))
```

`add_calculation` ignores an expression that has no operator, function or
variable, and returns whether it added an entry.

`initialize()` loads the rates stored in the database. It calls `fetch`
with the address in `scicalc.currency.RATES_URL` only when no rates are
stored. Without a `fetch` argument the rates are downloaded with `urllib`.
`parse_xml_data` always adds the rouble (`RUB`, rate 1) and replaces the
stored rates with the new ones. Download and parse failures raise
`CurrencyError`. `convert` returns `0.0` for an unknown currency.

## What the package does not do

It has no user interface and no command to run. The screens for the
keypad, the history, the plots and the converter are left to the
application that uses it. Rates are fetched only when `initialize()` or
`load_rates_from_network()` is called. Nothing refreshes them on a
schedule.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.