"""Tests for the data layer detectors: database, ORM, API patterns."""

import json
from pathlib import Path

from stackscan.detectors.data import detect_api_patterns, detect_database, detect_orm


def _write_pkg(tmp_repo: Path, data: dict) -> None:
    (tmp_repo / "package.json").write_text(json.dumps(data))


class TestDetectDatabase:
    def test_supabase_full_setup(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"@supabase/supabase-js": "2.43.0", "@supabase/ssr": "0.3.0"}})
        (tmp_repo / "supabase").mkdir()
        (tmp_repo / "supabase" / "config.toml").write_text("")
        db = detect_database(tmp_repo)
        assert db.name == "Supabase"
        assert db.confidence == 100
        assert len(db.evidence) == 4

    def test_supabase_outranks_postgres_driver(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"@supabase/supabase-js": "2.43.0", "pg": "8.11.0"}})
        assert detect_database(tmp_repo).name == "Supabase"

    def test_supabase_directory_alone_is_not_enough(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"pg": "8.11.0"}})
        (tmp_repo / "supabase").mkdir()
        assert detect_database(tmp_repo).name == "PostgreSQL"

    def test_firebase(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"firebase": "10.0.0", "firebase-admin": "12.0.0"}})
        db = detect_database(tmp_repo)
        assert db.name == "Firebase"
        assert db.confidence == 90

    def test_mongoose_variant(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"mongoose": "8.0.0"}})
        db = detect_database(tmp_repo)
        assert db.name == "MongoDB"
        assert db.variant == "mongoose"

    def test_mongodb_native_driver(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"mongodb": "6.0.0"}})
        assert detect_database(tmp_repo).variant == "native-driver"

    def test_postgres_js_variant(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"postgres": "3.4.0"}})
        db = detect_database(tmp_repo)
        assert db.variant == "postgres.js"
        assert db.version == "3.4.0"

    def test_nothing(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"react": "18.2.0"}})
        assert detect_database(tmp_repo) is None


class TestDetectOrm:
    def test_prisma_with_schema(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"@prisma/client": "5.0.0"}, "devDependencies": {"prisma": "5.0.0"}})
        (tmp_repo / "prisma").mkdir()
        (tmp_repo / "prisma" / "schema.prisma").write_text("")
        orm = detect_orm(tmp_repo)
        assert orm.name == "Prisma"
        assert orm.confidence == 100

    def test_drizzle_neon_variant(self, tmp_repo):
        _write_pkg(tmp_repo, {
            "dependencies": {"drizzle-orm": "0.30.0", "@neondatabase/serverless": "0.9.0"},
            "devDependencies": {"drizzle-kit": "0.20.0"},
        })
        (tmp_repo / "drizzle.config.ts").write_text("")
        orm = detect_orm(tmp_repo)
        assert orm.name == "Drizzle"
        assert orm.variant == "neon"
        assert orm.confidence == 100

    def test_drizzle_beats_weaker_prisma(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"drizzle-orm": "0.30.0", "@prisma/client": "5.0.0"}})
        assert detect_orm(tmp_repo).name == "Drizzle"

    def test_prisma_wins_tie(self, tmp_repo):
        _write_pkg(tmp_repo, {
            "dependencies": {"drizzle-orm": "0.30.0", "@prisma/client": "5.0.0"},
            "devDependencies": {"drizzle-kit": "0.20.0", "prisma": "5.0.0"},
        })
        assert detect_orm(tmp_repo).name == "Prisma"

    def test_schema_file_alone_is_below_threshold(self, tmp_repo):
        _write_pkg(tmp_repo, {"name": "x"})
        (tmp_repo / "schema.prisma").write_text("")
        assert detect_orm(tmp_repo) is None


class TestDetectApiPatterns:
    def test_multiple_patterns(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {
            "@trpc/server": "11.0.0",
            "@trpc/client": "11.0.0",
            "@tanstack/react-query": "5.0.0",
            "axios": "1.6.0",
        }})
        names = [r.name for r in detect_api_patterns(tmp_repo)]
        assert names == ["tRPC", "TanStack Query", "REST"]

    def test_trpc_server_and_client(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {
            "@trpc/server": "11.0.0",
            "@trpc/client": "11.0.0",
            "@trpc/next": "11.0.0",
        }})
        (trpc,) = detect_api_patterns(tmp_repo)
        assert trpc.confidence == 100
        assert len(trpc.evidence) == 3

    def test_graphql_apollo(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"graphql": "16.8.0", "@apollo/client": "3.9.0"}})
        (graphql,) = detect_api_patterns(tmp_repo)
        assert graphql.variant == "apollo"
        assert graphql.confidence == 80

    def test_graphql_schema_only_is_weak(self, tmp_repo):
        _write_pkg(tmp_repo, {"name": "x"})
        (tmp_repo / "schema.graphql").write_text("type Query { ok: Boolean }")
        (graphql,) = detect_api_patterns(tmp_repo)
        assert graphql.confidence == 20

    def test_rest_variant_is_last_client(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"axios": "1.6.0", "swr": "2.2.0"}})
        (rest,) = detect_api_patterns(tmp_repo)
        assert rest.variant == "swr"
        assert rest.confidence == 100

    def test_tanstack_vue(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"@tanstack/vue-query": "5.0.0"}})
        (query,) = detect_api_patterns(tmp_repo)
        assert query.variant == "vue"

    def test_nothing(self, tmp_repo):
        _write_pkg(tmp_repo, {"dependencies": {"react": "18.2.0"}})
        assert detect_api_patterns(tmp_repo) is None
