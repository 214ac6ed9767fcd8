# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shell completion scripts.

The bash, zsh, fish and PowerShell scripts are thin adapters: on every TAB they
run the program's hidden completion command with the words typed so far and
interpret the line protocol (candidates, then `:<directive>`). The nushell
script is generated from the command tree as `extern` declarations.

Templates use `__PROG__` (program name), `__FUNC__` (a shell-safe identifier)
and `__REQUEST__` (the hidden command name) placeholders.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from adder.command import Command

COMPLETE_REQUEST = "__complete"
COMPLETE_NO_DESC_REQUEST = "__complete_no_desc"

BASH_TEMPLATE = r"""# bash completion for __PROG__                              -*- shell-script -*-

__FUNC___complete()
{
    local cur words cword
    if declare -F _get_comp_words_by_ref >/dev/null 2>&1; then
        _get_comp_words_by_ref -n "=:" cur words cword
    else
        cur="${COMP_WORDS[COMP_CWORD]}"
        words=("${COMP_WORDS[@]}")
        cword=$COMP_CWORD
    fi

    local out directive line
    out=$("${words[0]}" __REQUEST__ "${words[@]:1:$cword}" 2>/dev/null)
    directive=${out##*:}
    out=${out%:*}
    [[ "$directive" =~ ^[0-9]+$ ]] || directive=0

    if (( (directive & 1) != 0 )); then
        return
    fi
    (( (directive & 2) != 0 )) && compopt -o nospace 2>/dev/null
    (( (directive & 32) != 0 )) && compopt -o nosort 2>/dev/null

    local -a candidates=()
    while IFS='' read -r line; do
        [[ -z "$line" || "$line" == _activeHelp_* ]] && continue
        candidates+=("${line%%$'\t'*}")
    done <<< "$out"

    if (( (directive & 8) != 0 )); then
        local filter=""
        for line in "${candidates[@]}"; do
            filter+="${filter:+|}${line}"
        done
        compopt -o filenames 2>/dev/null
        COMPREPLY=( $(compgen -f -X "!*.@(${filter})" -- "$cur") $(compgen -d -- "$cur") )
        return
    fi
    if (( (directive & 16) != 0 )); then
        compopt -o filenames 2>/dev/null
        if (( ${#candidates[@]} > 0 )); then
            COMPREPLY=( $(cd "${candidates[0]}" 2>/dev/null && compgen -d -- "$cur") )
        else
            COMPREPLY=( $(compgen -d -- "$cur") )
        fi
        return
    fi

    COMPREPLY=()
    for line in "${candidates[@]}"; do
        [[ "$line" == "$cur"* ]] && COMPREPLY+=("$line")
    done
    if (( ${#COMPREPLY[@]} == 0 && (directive & 4) == 0 )); then
        compopt -o default 2>/dev/null
    fi
}

complete -F __FUNC___complete __PROG__
"""

ZSH_TEMPLATE = r"""#compdef __PROG__
# zsh completion for __PROG__

___FUNC__()
{
    local out directive line value
    local -a candidates
    out=$(${words[1]} __REQUEST__ "${(@)words[2,CURRENT]}" 2>/dev/null)
    directive=${out##*:}
    out=${out%:*}
    [[ $directive == <-> ]] || directive=0

    (( directive & 1 )) && return 1

    for line in "${(@f)out}"; do
        [[ -z $line || $line == _activeHelp_* ]] && continue
        value=${line%%$'\t'*}
        value=${value//:/\\:}
        if [[ $line == *$'\t'* ]]; then
            candidates+=("${value}:${line#*$'\t'}")
        else
            candidates+=("${value}")
        fi
    done

    if (( directive & 8 )); then
        _files -g "*.(${(j:|:)candidates})"
        return
    fi
    if (( directive & 16 )); then
        if (( ${#candidates} )); then
            _files -/ -W "${candidates[1]}"
        else
            _files -/
        fi
        return
    fi

    local -a options
    (( directive & 2 )) && options+=(-S '')
    (( directive & 32 )) && options+=(-V)
    if (( ${#candidates} )); then
        _describe "${options[@]}" 'completions' candidates && return 0
    fi
    (( directive & 4 )) || _files
}

if [ "$funcstack[1]" = "___FUNC__" ]; then
    ___FUNC__ "$@"
else
    compdef ___FUNC__ __PROG__
fi
"""

FISH_TEMPLATE = r"""# fish completion for __PROG__

function __FUNC___complete
    set -l tokens (commandline -opc)
    set -l current (commandline -ct)
    set -l results ($tokens[1] __REQUEST__ $tokens[2..-1] "$current" 2>/dev/null)
    set -l directive (string replace -r '^:' '' -- $results[-1])
    set -e results[-1]

    if test (math "bitand($directive, 1)") -ne 0
        return
    end

    set -l shown 0
    for line in $results
        string match -q -- '_activeHelp_*' $line; and continue
        echo $line
        set shown (math $shown + 1)
    end

    if test $shown -eq 0; and test (math "bitand($directive, 4)") -eq 0
        __fish_complete_path $current
    end
end

complete -c __PROG__ -e
complete -c __PROG__ -f -a '(__FUNC___complete)'
"""

POWERSHELL_TEMPLATE = r"""# powershell completion for __PROG__

Register-ArgumentCompleter -CommandName '__PROG__' -ScriptBlock {
    param($WordToComplete, $CommandAst, $CursorPosition)

    $Elements = @($CommandAst.CommandElements | ForEach-Object { $_.ToString() })
    $Program = $Elements[0]
    $Request = @($Elements | Select-Object -Skip 1)
    if ($WordToComplete -eq '') { $Request += '""' }

    $Out = @(& $Program __REQUEST__ @Request 2>$null)
    if ($Out.Count -eq 0) { return }
    $Directive = 0
    if ($Out[-1] -match '^:(\d+)$') { $Directive = [int]$Matches[1] }
    if ($Directive -band 1) { return }

    $Out | Select-Object -SkipLast 1 | Where-Object { $_ -and -not $_.StartsWith('_activeHelp_') } | ForEach-Object {
        $Name, $Description = $_ -split "`t", 2
        if (-not $Description) { $Description = $Name }
        if ($Name -like "$WordToComplete*") {
            [System.Management.Automation.CompletionResult]::new($Name, $Name, 'ParameterValue', $Description)
        }
    }
}
"""


def shell_identifier(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", name)


def _render(template: str, cmd: Command, include_descriptions: bool) -> str:
    request = COMPLETE_REQUEST if include_descriptions else COMPLETE_NO_DESC_REQUEST
    name = cmd.root.name
    return (
        template.replace("__REQUEST__", request)
        .replace("__FUNC__", shell_identifier(name))
        .replace("__PROG__", name)
    )


def write_bash_completion(cmd: Command, out: TextIO, include_descriptions: bool = True) -> None:
    out.write(_render(BASH_TEMPLATE, cmd, include_descriptions))


def write_zsh_completion(cmd: Command, out: TextIO, include_descriptions: bool = True) -> None:
    out.write(_render(ZSH_TEMPLATE, cmd, include_descriptions))


def write_fish_completion(cmd: Command, out: TextIO, include_descriptions: bool = True) -> None:
    out.write(_render(FISH_TEMPLATE, cmd, include_descriptions))


def write_powershell_completion(
    cmd: Command, out: TextIO, include_descriptions: bool = True
) -> None:
    out.write(_render(POWERSHELL_TEMPLATE, cmd, include_descriptions))


def nushell_description(text: str) -> str:
    text = re.sub(r"\r?\n", " ", text)
    if len(text) > 100:
        text = text[:97] + "..."
    return text


def _nushell_flags(flags, include_descriptions: bool) -> list[str]:
    lines = []
    for flag in flags:
        line = f"\t--{flag.name}"
        if flag.shorthand:
            line += f"(-{flag.shorthand})"
        if include_descriptions and flag.usage:
            line += f"\t# {nushell_description(flag.usage)}"
        lines.append(line + "\n")
    return lines


def _nushell_extern(cmd: Command, path: str, is_root: bool, include_descriptions: bool) -> str:
    parts: list[str] = []
    if cmd.valid_args or cmd.has_available_flags():
        parts.append("\n")
        name = path if is_root else f'"{path}"'
        if include_descriptions and cmd.short:
            parts.append(f"# {nushell_description(cmd.short)}\n")
        parts.append(f"export extern {name} [\n")
        for arg in cmd.valid_args:
            parts.append(f"\t{arg.split(chr(9), 1)[0]}?\n")
        parts.extend(_nushell_flags(cmd.inherited_flags(), include_descriptions))
        parts.extend(_nushell_flags(cmd.local_flags(), include_descriptions))
        parts.append("]\n")
    for child in cmd.commands:
        parts.append(
            _nushell_extern(child, f"{path} {child.name}", False, include_descriptions)
        )
    return "".join(parts)


def write_nushell_completion(
    cmd: Command, out: TextIO, include_descriptions: bool = True
) -> None:
    """Write `extern` declarations for `cmd` and every descendant."""
    out.write(_nushell_extern(cmd, cmd.name, True, include_descriptions))
