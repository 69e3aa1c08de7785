"""
Solidity Compiler
Compiles contracts/ with the configured solc version into Hardhat-layout artifacts
"""

import json
from pathlib import Path
from typing import Dict, List
from loguru import logger
from solcx import compile_standard, get_installed_solc_versions, install_solc

ARTIFACT_FORMAT = "hh-sol-artifact-1"


class CompilationError(RuntimeError):
    """solc could not compile the sources"""


def ensure_solc(version: str):
    """Install the requested solc version if it is not available yet"""
    installed = {str(v) for v in get_installed_solc_versions()}

    if version not in installed:
        logger.info(f"Installing solc {version}...")
        install_solc(version)


def _standard_input(sources_path: Path) -> Dict:
    sources = {}
    for source_file in sorted(sources_path.rglob('*.sol')):
        source_name = f"{sources_path.name}/{source_file.relative_to(sources_path).as_posix()}"
        sources[source_name] = {'content': source_file.read_text()}

    return {
        'language': 'Solidity',
        'sources': sources,
        'settings': {
            'optimizer': {'enabled': False, 'runs': 200},
            'outputSelection': {
                '*': {
                    '*': ['abi', 'evm.bytecode', 'evm.deployedBytecode']
                }
            }
        }
    }


def _to_artifact(contract_name: str, source_name: str, output: Dict) -> Dict:
    bytecode = output['evm']['bytecode']
    deployed = output['evm']['deployedBytecode']

    return {
        '_format': ARTIFACT_FORMAT,
        'contractName': contract_name,
        'sourceName': source_name,
        'abi': output['abi'],
        'bytecode': '0x' + bytecode['object'],
        'deployedBytecode': '0x' + deployed['object'],
        'linkReferences': bytecode.get('linkReferences', {}),
        'deployedLinkReferences': deployed.get('linkReferences', {})
    }


def compile_sources(sources_path, artifacts_path, solc_version: str) -> List[Path]:
    """
    Compile every .sol file under sources_path

    Artifacts are written to <artifacts>/<sourceName>/<ContractName>.json,
    e.g. artifacts/contracts/Tanda.sol/Tanda.json.

    Args:
        sources_path: Directory holding .sol files
        artifacts_path: Output directory
        solc_version: Compiler version, e.g. "0.8.21"

    Returns:
        Paths of the written artifacts
    """
    sources_path = Path(sources_path)
    artifacts_path = Path(artifacts_path)

    if not solc_version:
        raise CompilationError("No solidity version configured")

    standard_input = _standard_input(sources_path)
    if not standard_input['sources']:
        raise CompilationError(f"No Solidity sources found in {sources_path}")

    ensure_solc(solc_version)

    logger.info(f"Compiling {len(standard_input['sources'])} file(s) with solc {solc_version}")

    try:
        compiled = compile_standard(
            standard_input,
            solc_version=solc_version,
            allow_paths=[str(sources_path.resolve())],
            base_path=str(sources_path.resolve().parent)
        )
    except Exception as e:
        raise CompilationError(f"Compilation failed: {e}") from e

    written = []
    for source_name, contracts in compiled.get('contracts', {}).items():
        for contract_name, output in contracts.items():
            artifact_dir = artifacts_path / source_name
            artifact_dir.mkdir(parents=True, exist_ok=True)

            artifact_file = artifact_dir / f"{contract_name}.json"
            with open(artifact_file, 'w') as f:
                json.dump(_to_artifact(contract_name, source_name, output), f, indent=2)

            written.append(artifact_file)

    logger.success(f"Compiled {len(written)} contract(s)")
    return written
