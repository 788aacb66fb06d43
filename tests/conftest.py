"""pytest fixtures for parrodessa tests.

Provides:
- isolated_env: Autouse fixture clearing configuration env vars and .env lookup
- signer / node_signer: Deterministic local-key signer and unlocked node signer
- profile: Sepolia-like NetworkProfile pointing at a fake RPC URL
- chain: FakeEth standing in for w3.eth (contracts, signing, receipts)
- w3: Fake Web3 wrapping ``chain``
- nft: In-memory ParrOdessa42 registered on ``chain``
"""

from types import SimpleNamespace

import pytest
from eth_account import Account
from hexbytes import HexBytes

from parrodessa.core.config import NetworkProfile
from parrodessa.services.blockchain.connection import Signer

SIGNER_PRIVATE_KEY = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"
NODE_ACCOUNT = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
CONTRACT_ADDRESS = "0x3efe95995c9a05d750a8e60371c5e426ea28637a"
BASE_URI = "https://ipfs.io/ipfs/"

CONFIG_ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "NETWORK",
    "LOCALHOST_RPC_URL",
    "LOCALHOST_CHAIN_ID",
    "SEPOLIA_RPC_URL",
    "MAINNET_RPC_URL",
    "PRIVATE_KEY",
    "GAS_PRICE_WEI",
    "TRANSACTION_TIMEOUT_SECONDS",
    "ETHERSCAN_API_KEY",
    "CONTRACT_ARTIFACT_PATH",
    "CONTRACT_ADDRESS",
    "METADATA_URI",
)


class FakeCall:
    """Bound contract function: ``call()`` for views, transaction methods for writes."""

    def __init__(self, eth: "FakeEth", read=None, effect=None):
        self._eth = eth
        self._read = read
        self._effect = effect

    def call(self):
        return self._read()

    def build_transaction(self, params):
        self._eth.built.append(dict(params))
        if self._eth.build_error is not None:
            raise self._eth.build_error
        return {**params, "gas": 250_000, "_effect": self._effect}

    def transact(self, params):
        return self._eth.execute({**params, "_effect": self._effect})


class FakeParrOdessa42:
    """In-memory stand-in for the external ParrOdessa42 contract.

    Token ids are assigned sequentially from 0, so the newest token is
    ``totalSupply - 1``. A mint's receipt carries the id its Transfer event
    reports.
    """

    def __init__(
        self,
        eth: "FakeEth",
        address: str = CONTRACT_ADDRESS,
        max_supply: int = 42,
        total_supply: int = 0,
        mint_price_wei: int = 10**16,
        minting_enabled: bool = True,
        base_uri: str = BASE_URI,
    ):
        self.eth = eth
        self.address = address
        self.max_supply = max_supply
        self.total_supply = total_supply
        self.mint_price_wei = mint_price_wei
        self.minting_enabled = minting_enabled
        self.base_uri = base_uri
        self.owners: dict[int, str] = {}
        self.token_uris: dict[int, str] = {}
        self.functions = SimpleNamespace(
            MAX_SUPPLY=lambda: FakeCall(eth, read=lambda: self.max_supply),
            totalSupply=lambda: FakeCall(eth, read=lambda: self.total_supply),
            mintPrice=lambda: FakeCall(eth, read=lambda: self.mint_price_wei),
            mintingEnabled=lambda: FakeCall(eth, read=lambda: self.minting_enabled),
            ownerOf=lambda token_id: FakeCall(eth, read=lambda: self.owners[token_id]),
            tokenURI=lambda token_id: FakeCall(eth, read=lambda: self.token_uris[token_id]),
            balanceOf=lambda owner: FakeCall(eth, read=lambda: self._balance(owner)),
            mintNFT=lambda to, uri: FakeCall(eth, effect=lambda: self._mint(to, uri)),
        )
        self.events = SimpleNamespace(
            Transfer=lambda: SimpleNamespace(process_receipt=self._transfer_events)
        )

    def _balance(self, owner: str) -> int:
        return sum(1 for holder in self.owners.values() if holder.lower() == owner.lower())

    def _mint(self, to: str, uri: str) -> dict:
        token_id = self.total_supply
        self.owners[token_id] = to
        self.token_uris[token_id] = self.base_uri + uri
        self.total_supply += 1
        return {"transferTokenIds": [token_id]}

    def _transfer_events(self, receipt, errors=None):
        token_ids = receipt.get("transferTokenIds", [])
        return [{"args": {"tokenId": token_id}} for token_id in token_ids]


class FakeFactory:
    """Contract factory whose constructor deploys a FakeParrOdessa42 at CONTRACT_ADDRESS."""

    def __init__(self, eth: "FakeEth", **contract_kwargs):
        self.eth = eth
        self.contract_kwargs = contract_kwargs
        self.constructor_args: tuple | None = None

    def constructor(self, *args):
        self.constructor_args = args

        def deploy():
            nft = FakeParrOdessa42(self.eth, base_uri=args[2], **self.contract_kwargs)
            self.eth.register(nft)
            return {"contractAddress": nft.address}

        return FakeCall(self.eth, effect=deploy)


class FakeEth:
    """Minimal stand-in for ``w3.eth`` covering what the workflows call."""

    def __init__(self, chain_id: int = 11155111):
        self.chain_id = chain_id
        self.accounts = [NODE_ACCOUNT]
        self.account = SimpleNamespace(sign_transaction=self._sign_transaction)
        self.contracts: dict[str, object] = {}
        self.factory: FakeFactory | None = None
        self.built: list[dict] = []
        self.sent: list[dict] = []
        self.receipts: dict[HexBytes, dict] = {}
        self.build_error: Exception | None = None
        self.send_error: Exception | None = None
        self.receipt_status = 1

    def register(self, contract) -> None:
        self.contracts[contract.address.lower()] = contract

    def contract(self, address=None, abi=None, bytecode=None):
        if address is None:
            return self.factory
        return self.contracts[address.lower()]

    def get_transaction_count(self, address, block_identifier="latest"):
        return len(self.sent)

    def _sign_transaction(self, transaction, private_key):
        return SimpleNamespace(raw_transaction=transaction)

    def send_raw_transaction(self, raw_transaction):
        return self.execute(raw_transaction)

    def execute(self, transaction: dict) -> HexBytes:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(transaction)
        tx_hash = HexBytes(bytes([len(self.sent)]) * 32)
        extra = transaction["_effect"]() if self.receipt_status == 1 else {}
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "status": self.receipt_status,
            "blockNumber": 1000 + len(self.sent),
            "gasUsed": 120_000,
            **(extra or {}),
        }
        return tx_hash

    def wait_for_transaction_receipt(self, transaction_hash, timeout=120):
        return self.receipts[HexBytes(transaction_hash)]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Clear configuration env vars and run from an empty directory (no .env)."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_ENV", "test")


@pytest.fixture
def signer():
    """Local-key signer with a deterministic address."""
    account = Account.from_key(SIGNER_PRIVATE_KEY)
    return Signer(address=account.address, private_key=SIGNER_PRIVATE_KEY)


@pytest.fixture
def node_signer():
    """Unlocked node account signer (no private key)."""
    return Signer(address=NODE_ACCOUNT)


@pytest.fixture
def profile():
    return NetworkProfile(
        name="sepolia",
        rpc_url="http://rpc.test",
        chain_id=11155111,
        gas_price_wei=20_000_000_000,
        timeout_seconds=120,
        explorer_url="https://sepolia.etherscan.io",
        explorer_api_key="test-key",
    )


@pytest.fixture
def chain():
    return FakeEth()


@pytest.fixture
def w3(chain):
    return SimpleNamespace(eth=chain)


@pytest.fixture
def nft(chain):
    """Deployed contract with 5 tokens already minted."""
    contract = FakeParrOdessa42(chain, total_supply=5)
    chain.register(contract)
    return contract


@pytest.fixture
def contract_address():
    return CONTRACT_ADDRESS


@pytest.fixture(autouse=True)
def default_structlog(monkeypatch):
    """Keep structlog on its default (uncached, current-stdout) configuration.

    The CLI would otherwise bind loggers to the capture stream of whichever test
    configured logging first.
    """
    monkeypatch.setattr("parrodessa.cli.common.configure_logging", lambda settings: None)


@pytest.fixture
def factory(chain):
    """Install a FakeFactory on ``chain``; keyword args configure the deployed contract."""

    def install(**contract_kwargs) -> FakeFactory:
        chain.factory = FakeFactory(chain, **contract_kwargs)
        return chain.factory

    return install
