"""
Runs small helper scripts under Node.

Schema introspection and the TypeScript to JavaScript transform rely on
packages installed in the target project, so the scripts run with the
project directory as working directory and resolve modules from there.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from .errors import NodeScriptError

logger = logging.getLogger(__name__)

NODE_COMMAND = "node"

# Reads a Prisma schema from stdin and prints its datamodel as JSON
DMMF_SCRIPT = """
const { getDMMF } = require('@prisma/internals')
let datamodel = ''
process.stdin.on('data', (chunk) => (datamodel += chunk))
process.stdin.on('end', async () => {
  const dmmf = await getDMMF({ datamodel })
  process.stdout.write(JSON.stringify(dmmf.datamodel))
})
"""

# Reads {filename, code} from stdin and prints the code with TypeScript stripped
BABEL_TS_SCRIPT = """
const babel = require('@babel/core')
let input = ''
process.stdin.on('data', (chunk) => (input += chunk))
process.stdin.on('end', () => {
  const { filename, code } = JSON.parse(input)
  const result = babel.transform(code, {
    filename,
    configFile: false,
    plugins: [['@babel/plugin-transform-typescript', { isTSX: true, allExtensions: true }]],
    retainLines: true,
  })
  process.stdout.write(result ? result.code : '')
})
"""


def run_node_script(script: str, stdin: str, cwd: Path | None = None, timeout: int = 60) -> str:
    """
    Run a script with Node and return its standard output.

    Args:
        script: JavaScript source passed to ``node -e``
        stdin: Text fed to the script on standard input
        cwd: Working directory (module resolution starts here)
        timeout: Seconds to wait for the script

    Returns:
        The script's standard output

    Raises:
        NodeScriptError: If Node is missing, times out or exits non-zero
    """
    logger.debug("Running node script in %s", cwd)
    try:
        result = subprocess.run(
            [NODE_COMMAND, "-e", script],
            input=stdin,
            capture_output=True,
            text=True,
            cwd=str(cwd) if cwd else None,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise NodeScriptError(f"'{NODE_COMMAND}' was not found on PATH") from e
    except subprocess.TimeoutExpired as e:
        raise NodeScriptError(f"Node script timed out after {timeout}s") from e

    if result.returncode != 0:
        raise NodeScriptError(f"Node script failed: {result.stderr.strip()}")
    return result.stdout


def run_node_json(script: str, stdin: str, cwd: Path | None = None, timeout: int = 60) -> Any:
    """Run a Node script and parse its standard output as JSON."""
    output = run_node_script(script, stdin, cwd=cwd, timeout=timeout)
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        raise NodeScriptError(f"Node script returned invalid JSON: {e}") from e
