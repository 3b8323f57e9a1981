"""設定管理モジュール"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class SplitConfig:
    """インラインスクリプト分離設定"""
    js_file_name: str = ""              # 生成する<script src>に書き込むファイル名
    script_in_head: bool = True         # True: <head>先頭にdefer付きで挿入 / False: <body>末尾
    only_split: bool = False            # True: 外部スクリプト参照を挿入しない
    always_write_script: bool = False   # True: インラインスクリプトがなくても参照を挿入
    parser: str = "html.parser"         # BeautifulSoupのパーサ名


@dataclass
class OutputConfig:
    """出力設定"""
    html_encoding: str = "utf-8"
    js_encoding: str = "utf-8"
    log_level: str = "INFO"


@dataclass
class Config:
    """全体設定"""
    split: SplitConfig = field(default_factory=SplitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """設定ファイルを読み込む"""
        if config_path is None:
            # デフォルトパスを使用
            base_dir = Path(__file__).parent.parent
            config_path = base_dir / "config" / "config.yaml"

        config_path = Path(config_path)

        if not config_path.exists():
            # 設定ファイルがない場合はデフォルト設定を返す
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return cls._from_dict(data or {})

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> Config:
        """辞書から設定を生成"""
        config = cls()

        # Split
        if "split" in data:
            s = data["split"] or {}
            config.split = SplitConfig(
                js_file_name=s.get("js_file_name", ""),
                script_in_head=s.get("script_in_head", True),
                only_split=s.get("only_split", False),
                always_write_script=s.get("always_write_script", False),
                parser=s.get("parser", "html.parser"),
            )

        # Output
        if "output" in data:
            o = data["output"] or {}
            config.output = OutputConfig(
                html_encoding=o.get("html_encoding", "utf-8"),
                js_encoding=o.get("js_encoding", "utf-8"),
                log_level=o.get("log_level", "INFO"),
            )

        return config


# グローバル設定インスタンス
_config: Config | None = None


def get_config(config_path: str | Path | None = None) -> Config:
    """設定を取得する（シングルトン）"""
    global _config
    if _config is None:
        _config = Config.load(config_path)
    return _config


def reload_config(config_path: str | Path | None = None) -> Config:
    """設定を再読み込みする"""
    global _config
    _config = Config.load(config_path)
    return _config
