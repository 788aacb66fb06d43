"""Contract ABI utilities.

The packaged ``ParrOdessa42.json`` holds the interface ABI the workflows call.
Deployment additionally needs creation bytecode, which comes from the compiled
Hardhat artifact (``artifacts/contracts/<Name>.sol/<Name>.json``).
"""

import json
from dataclasses import dataclass
from pathlib import Path

from parrodessa.services.exceptions import ArtifactError

CONTRACT_NAME = "ParrOdessa42"


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode of a compiled contract."""

    contract_name: str
    abi: list[dict]
    bytecode: str


def get_contract_abi(contract_name: str = CONTRACT_NAME) -> list[dict]:
    """Load contract ABI from package resources.

    Args:
        contract_name: Name of the contract (default: "ParrOdessa42")

    Returns:
        ABI as list of function/event descriptors

    Raises:
        FileNotFoundError: If ABI file doesn't exist for the specified contract

    Example:
        >>> abi = get_contract_abi()
        >>> contract = w3.eth.contract(address=addr, abi=abi)
    """
    abi_path = Path(__file__).parent / f"{contract_name}.json"

    if not abi_path.exists():
        raise FileNotFoundError(f"ABI file not found: {abi_path}")

    with open(abi_path) as f:
        return json.load(f)


def load_contract_artifact(artifact_path: str | Path) -> ContractArtifact:
    """Load a Hardhat build artifact for deployment.

    Args:
        artifact_path: Path to the artifact JSON (``abi`` and ``bytecode`` keys)

    Returns:
        ContractArtifact with ABI and 0x-prefixed bytecode

    Raises:
        ArtifactError: If the file is missing, unreadable, or has no bytecode
    """
    path = Path(artifact_path)

    if not path.is_file():
        raise ArtifactError(
            f"Contract artifact not found: {path}\n"
            "Compile the contract (npx hardhat compile) or set CONTRACT_ARTIFACT_PATH."
        )

    try:
        with open(path) as f:
            artifact = json.load(f)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Contract artifact is not valid JSON: {path}") from e

    abi = artifact.get("abi")
    bytecode = artifact.get("bytecode") or ""
    if isinstance(bytecode, dict):
        # Foundry layout: {"bytecode": {"object": "0x..."}}
        bytecode = bytecode.get("object") or ""

    if not isinstance(abi, list):
        raise ArtifactError(f"Contract artifact has no ABI: {path}")
    if bytecode in ("", "0x"):
        raise ArtifactError(f"Contract artifact has no creation bytecode: {path}")

    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return ContractArtifact(
        contract_name=artifact.get("contractName", path.stem),
        abi=abi,
        bytecode=bytecode,
    )
