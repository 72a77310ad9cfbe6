import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

try:
    from tradejournal.core.entities.trade import Direction
    from tradejournal.core.use_cases.pnl_calculator import compute_pnl
    from tradejournal.core.use_cases.position_sizer import compute_lot_size
    from tradejournal.api.main import app
    print("✅ All imports successful.")
except Exception as e:
    print(f"❌ Import failed: {e}")
    sys.exit(1)

# Sizing + scoring round trip on the reference gold setup
def check_calculators():
    try:
        size = compute_lot_size(10000, 2, 2050.0, 2045.0, 0.01, 100)
        pnl = compute_pnl(Direction.BUY, 2050.0, 2045.0, size.lot_size, 100)

        if abs(pnl.result_primary + size.risk_amount) < 1e-6:
            print(f"✅ Stop-out loses exactly the risk amount ({size.risk_amount:.2f} USD at {size.lot_size:.2f} lots).")
        else:
            print(f"❌ Expected loss {size.risk_amount}, got {pnl.result_primary}")
    except Exception as e:
        print(f"❌ Calculator check raised exception: {e}")

if __name__ == "__main__":
    check_calculators()
