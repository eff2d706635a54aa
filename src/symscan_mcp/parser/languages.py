"""Language registry with LanguageSpec definitions for all supported languages."""

import re
from dataclasses import dataclass

from ..errors import UnsupportedLanguage


@dataclass(frozen=True)
class LanguageSpec:
    """Static metadata and comment rules for one supported language."""
    # Language identifier used for dispatch (e.g., "cpp")
    id: str

    # Display name (e.g., "C++")
    name: str

    # Canonical file extension
    extension: str

    # Every file extension mapped to this language
    extensions: tuple[str, ...]

    # Line-prefix patterns marking a comment-only line
    # A trimmed line is a comment if ANY pattern matches its start
    comment_patterns: tuple[re.Pattern, ...]

    # Prefixes that bypass the comment filter
    # C/C++ treat "#" as a comment but still scan #define and #include
    directive_prefixes: tuple[str, ...]

    # Keywords shown alongside the example
    keywords: tuple[str, ...]

    # Illustrative example source
    example: str


_C_FAMILY_COMMENTS = (re.compile(r"^//"), re.compile(r"^/\*"), re.compile(r"^\*"))
_HASH_COMMENT = re.compile(r"^#")


JAVASCRIPT_SPEC = LanguageSpec(
    id="javascript",
    name="JavaScript",
    extension=".js",
    extensions=(".js", ".jsx", ".mjs", ".cjs"),
    comment_patterns=_C_FAMILY_COMMENTS,
    directive_prefixes=(),
    keywords=("let", "const", "var", "function", "class", "import", "export"),
    example="""\
// JavaScript Example
import { readFile } from 'fs';

let userName = "Alice";
const PI = 3.14159;
var count = 0;

function calculateArea(radius) {
  let area = PI * radius * radius;
  console.log(area);
  return area;
}

class Circle {
  constructor(radius) {
    this.radius = radius;
  }

  getArea() {
    return Math.round(PI * this.radius * this.radius);
  }
}

Circle.unit = new Circle(1);
""",
)


PYTHON_SPEC = LanguageSpec(
    id="python",
    name="Python",
    extension=".py",
    extensions=(".py", ".pyw"),
    comment_patterns=(_HASH_COMMENT,),
    directive_prefixes=(),
    keywords=("def", "class", "import", "from", "global", "nonlocal"),
    example="""\
# Python Example
import math
from os import path, sep

user_name = "Alice"
PI: float = 3.14159
count = 0

def calculate_area(radius):
    area = PI * radius * radius
    print(area)
    return area

class Circle:
    def __init__(self, radius):
        self.radius = radius

    def get_area(self):
        return round(PI * self.radius * self.radius, 2)
""",
)


JAVA_SPEC = LanguageSpec(
    id="java",
    name="Java",
    extension=".java",
    extensions=(".java",),
    comment_patterns=_C_FAMILY_COMMENTS,
    directive_prefixes=(),
    keywords=("public", "private", "protected", "static", "final", "class", "import", "package"),
    example="""\
// Java Example
import java.util.Scanner;

public class Calculator {
    private static final double PI = 3.14159;
    private String userName = "Alice";
    private int count = 0;

    public Calculator() {
        count = 1;
    }

    public double calculateArea(double radius) {
        double area = PI * radius * radius;
        return area;
    }

    public static void main(String[] args) {
        Calculator calc = new Calculator();
        System.out.println("Hello, " + calc.userName);
    }
}
""",
)


C_SPEC = LanguageSpec(
    id="c",
    name="C",
    extension=".c",
    extensions=(".c", ".h"),
    comment_patterns=_C_FAMILY_COMMENTS + (_HASH_COMMENT,),
    directive_prefixes=("#define", "#include"),
    keywords=("#include", "#define", "int", "double", "float", "char", "void", "struct", "typedef"),
    example="""\
// C Example
#include <stdio.h>
#include <math.h>

#define PI 3.14159

struct Point {
    int x;
    int y;
};

char userName[] = "Alice";
int count = 0;

double calculateArea(double radius) {
    double area = PI * radius * radius;
    return area;
}

int main() {
    double radius = 5.0;
    printf("Area: %.2f\\n", calculateArea(radius));
    return 0;
}
""",
)


CPP_SPEC = LanguageSpec(
    id="cpp",
    name="C++",
    extension=".cpp",
    extensions=(".cpp", ".cc", ".cxx", ".hpp", ".hh", ".hxx"),
    comment_patterns=_C_FAMILY_COMMENTS + (_HASH_COMMENT,),
    directive_prefixes=("#define", "#include"),
    keywords=("#include", "class", "public", "private", "protected", "namespace", "using", "template"),
    example="""\
// C++ Example
#include <iostream>
#include <string>

using namespace std;

const double PI = 3.14159;

class Circle {
private:
    double radius;
    std::string name;

public:
    Circle(double r, std::string n) : radius(r), name(n) {}

    double calculateArea() {
        return PI * radius * radius;
    }
};

int main() {
    Circle myCircle(5.0, "MyCircle");
    return 0;
}
""",
)


CSHARP_SPEC = LanguageSpec(
    id="csharp",
    name="C#",
    extension=".cs",
    extensions=(".cs",),
    comment_patterns=_C_FAMILY_COMMENTS,
    directive_prefixes=(),
    keywords=("using", "namespace", "class", "public", "private", "protected", "static", "const"),
    example="""\
// C# Example
using System;

namespace Geometry
{
    public class Circle
    {
        private const double PI = 3.14159;
        private string userName = "Alice";
        public double Radius { get; set; }

        public Circle(double radius)
        {
            Radius = radius;
        }

        public double CalculateArea()
        {
            double area = PI * Radius * Radius;
            return area;
        }
    }
}
""",
)


GO_SPEC = LanguageSpec(
    id="go",
    name="Go",
    extension=".go",
    extensions=(".go",),
    comment_patterns=_C_FAMILY_COMMENTS,
    directive_prefixes=(),
    keywords=("package", "import", "func", "var", "const", "type", "struct", "interface"),
    example="""\
// Go Example
package main

import (
    "fmt"
    "math"
)

const PI = 3.14159

var userName string = "Alice"

type Circle struct {
    radius float64
}

func (c Circle) getArea() float64 {
    return PI * c.radius * c.radius
}

func main() {
    circle := Circle{radius: 5.0}
    area := circle.getArea()
    fmt.Printf("Area: %.2f, %s\\n", math.Round(area), userName)
}
""",
)


RUST_SPEC = LanguageSpec(
    id="rust",
    name="Rust",
    extension=".rs",
    extensions=(".rs",),
    comment_patterns=_C_FAMILY_COMMENTS,
    directive_prefixes=(),
    keywords=("use", "fn", "let", "mut", "const", "static", "struct", "impl", "trait", "enum"),
    example="""\
// Rust Example
use std::f64::consts::PI;
use std::collections::{HashMap, HashSet};

static USER_NAME: &str = "Alice";

struct Circle {
    radius: f64,
}

impl Circle {
    fn new(radius: f64) -> Circle {
        Circle { radius }
    }

    fn get_area(&self) -> f64 {
        PI * self.radius * self.radius
    }
}

fn main() {
    let circle = Circle::new(5.0);
    let area: f64 = circle.get_area();
    println!("{} {}", USER_NAME, area);
}
""",
)


# Language registry
LANGUAGE_REGISTRY = {
    "javascript": JAVASCRIPT_SPEC,
    "python": PYTHON_SPEC,
    "java": JAVA_SPEC,
    "c": C_SPEC,
    "cpp": CPP_SPEC,
    "csharp": CSHARP_SPEC,
    "go": GO_SPEC,
    "rust": RUST_SPEC,
}

SUPPORTED_LANGUAGES = tuple(LANGUAGE_REGISTRY)


# File extension to language mapping
LANGUAGE_EXTENSIONS = {
    ext: spec.id
    for spec in LANGUAGE_REGISTRY.values()
    for ext in spec.extensions
}


def get_language_spec(language: str) -> LanguageSpec:
    """Look up a language, raising UnsupportedLanguage for unknown ids."""
    try:
        return LANGUAGE_REGISTRY[language]
    except (KeyError, TypeError):
        raise UnsupportedLanguage.for_language(language) from None
