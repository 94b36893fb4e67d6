#!/usr/bin/env python3
"""
Pipeline de CI local para file-storage.
Lint, contratos de tipos del dominio, tests rápidos y tests de infraestructura/E2E.

Uso: python scripts/ci_pipeline.py
"""

import subprocess
import sys
import time
from datetime import datetime

MODULES = ("paths", "integrity")


class Colors:
    HEADER = "\033[95m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def print_step(step_name):
    print(f"\n{Colors.HEADER}=== {step_name} ==={Colors.ENDC}")


def run_command(command, description):
    print(f"⏳ {description}...")
    start = time.time()
    result = subprocess.run(command, capture_output=True, text=True)
    duration = time.time() - start

    if result.returncode == 0:
        print(f"{Colors.OKGREEN}✅ OK ({duration:.2f}s){Colors.ENDC}")
        return True
    print(f"{Colors.FAIL}❌ FALLÓ ({duration:.2f}s){Colors.ENDC}")
    print(f"{Colors.WARNING}{result.stdout}\n{result.stderr}{Colors.ENDC}")
    return False


def layer_paths(root, layers):
    return [f"{root}/{module}/{layer}" for module in MODULES for layer in layers]


def main():
    start_total = time.time()
    print(f"{Colors.BOLD}🚀 CI file-storage | {datetime.now():%Y-%m-%d %H:%M}{Colors.ENDC}")

    print_step("1. LINT")
    if not run_command(["ruff", "check", "src/", "tests/"], "ruff sobre src y tests"):
        print(f"{Colors.WARNING}⚠️  Advertencias de estilo (no bloqueante){Colors.ENDC}")

    print_step("2. CONTRATOS DE TIPOS (DOMINIO)")
    domain = layer_paths("src/file_storage/modules", ["domain"])
    if not run_command(["mypy", *domain, "--ignore-missing-imports"], "mypy en el dominio"):
        sys.exit(1)

    print_step("3. TESTS DOMINIO + APLICACIÓN")
    fast = layer_paths("tests/modules", ["domain", "application"])
    if not run_command(["pytest", *fast, "tests/core", "-q"], "Lógica pura"):
        sys.exit(1)

    print_step("4. TESTS INFRAESTRUCTURA + E2E")
    slow = layer_paths("tests/modules", ["infrastructure"])
    if not run_command(
        ["pytest", *slow, "tests/infrastructure", "tests/e2e", "-q"],
        "Adaptadores, CLI y filesystem real",
    ):
        sys.exit(1)

    print(f"\n{Colors.OKGREEN}🎉 BUILD OK en {time.time() - start_total:.2f}s{Colors.ENDC}")


if __name__ == "__main__":
    main()
