"""Quick check of database state."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from scorestore.db import UserRepository, get_db

db = get_db()
users = UserRepository(db).list_all()

print(f"=== Users ({db.path}) ===")
print(f"Total: {len(users)}")
for u in users:
    print(f"  {u.id:>4} | {u.name[:30]:<30} | {str(u.email)[:30]:<30} | {u.score}")
