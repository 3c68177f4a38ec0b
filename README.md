# onchainkit

Pure-Python building blocks for token-swap and escrow programs that work on
in-memory account data. There are no dependencies outside the standard library.

## Modules

- `onchainkit.curve` does constant-product (x·y = k) arithmetic with
  fixed-width integer limits:
  - `k_from_xy`, the invariant.
  - `spot_price_from_pair`.
  - `xy_deposit_amounts_from_l` and `xy_withdraw_amounts_from_l`, which give
    the amounts of X and Y for a given amount of liquidity tokens.
  - `x2_from_y_swap_amount` and `y2_from_x_swap_amount`.
  - `delta_x_from_y_swap_amount` and `delta_y_from_x_swap_amount`.
  - The `*_with_fee` variants. These take a fee in basis points and return
    `(amount_out, fee_amount)`.

  A result that leaves the 64- or 128-bit range raises `CurveError`. An
  argument that is out of range raises `ValueError`.
- `onchainkit.accounts` holds the basic types:
  - `AccountInfo`, which has a key, owner, data, signer and writable flags,
    and lamports.
  - `ProgramError`, which carries a `ProgramErrorKind` and, for custom errors,
    a `code`.
  - `decode_pubkey`, a base58 decoder that returns a 32-byte key.
  - `TokenLedger`, an in-memory token ledger with `supply`, `balance`,
    `transfer`, `mint_to` and `burn`.
- `onchainkit.layout` defines declarative fixed-offset views. `AccountView`
  subclasses list their `Field`s and then read and write them with `get` and
  `set`. `MyAccount` is one such view, with the fields `maker`, `amount` and
  `bump`. `process_instruction` loads the first account as a `MyAccount` and
  logs its maker.
- `onchainkit.amm_state` holds `Config`, a live view of an AMM pool account.
  It gives `status`, `update_authority`, `mint_x`, `mint_y`, `mint_lp`,
  `vault_x`, `vault_y`, `fee` and `authority_bump`.
- `onchainkit.amm` holds the AMM instructions:
  - `AmmInstruction` is the set of discriminators.
  - `initialize` copies the pool layout into a signing config account.
  - `lock` lets the update authority toggle the pool between open and locked.
  - `deposit` and `withdraw` move tokens through a `TokenLedger`. A step that
    fails rolls the ledger back.
  - `process_instruction` dispatches on the first byte.
- `onchainkit.escrow` covers the escrow record and its helpers:
  - `Escrow`, a frozen record with `to_bytes` and `from_bytes`.
  - `init_escrow`, which writes a record into an account.
  - `EscrowInstruction` and `EscrowError`.
  - `check_program_id` and `add`.
- `onchainkit.escrow_optimized` holds `EscrowView`, a compact escrow layout
  that is read in place. It also holds `OptimizedInstruction`, and `make`,
  which records the maker and the maker's token-B account.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Example

```python
from onchainkit.curve import delta_y_from_x_swap_amount_with_fee, k_from_xy

k_from_xy(20, 30)                                    # 600
delta_y_from_x_swap_amount_with_fee(20, 30, 5, 0)    # (6, 0)
delta_y_from_x_swap_amount_with_fee(20, 30, 5, 100)  # (5, 1)
```

## What it does not do

- It does not talk to a blockchain or any network. Accounts and token
  balances exist only in memory, through `AccountInfo` and `TokenLedger`.
- The AMM has no swap handler. `AmmInstruction.SWAP` is recognised, but
  `process_instruction` rejects it with `INVALID_INSTRUCTION_DATA`.
- The escrow modules define the discriminators for take and refund, but they
  provide no take or refund instructions. The only escrow instruction is
  `escrow_optimized.make`.
- It has no command-line interface.

## Tests

```
pytest
```