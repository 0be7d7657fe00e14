import pytest

from gobind_gen import CallGenerator, GenConfig
from gobind_gen.expr import Convert, ExprStmt, ParamDecl, Return

RECEIVER = "struct _cef_foo_t *self"


def _method(make_field, ret: str, *params: str):
    return make_field("method", f"{ret} (*)({', '.join((RECEIVER,) + params)})")


def test_get_size_scenario(make_field, call_gen) -> None:
    field = make_field("get_size", "size_t (*)(struct _cef_foo_t *self)")

    assert len(call_gen.parameter_list(field)) == 0
    assert call_gen.parameter_list(field).render() == ""

    body = call_gen.call_function_pointer(field)
    assert len(body) == 1
    ret = body.statements[0]
    assert isinstance(ret, Return)
    assert isinstance(ret.value, Convert)
    assert ret.value.type == "uint64"
    assert body.render() == "return uint64(C.gocef_foo_get_size(d.toNative(), d.get_size))"


def test_only_last_of_a_run_is_annotated(make_field, call_gen) -> None:
    field = _method(make_field, "void", "int x", "int y", "int z")
    params = call_gen.parameter_list(field)
    assert list(params) == [ParamDecl("p1"), ParamDecl("p2"), ParamDecl("p3", "int32")]
    assert params.render() == "p1, p2, p3 int32"


def test_runs_restart_after_a_different_type(make_field, call_gen) -> None:
    field = _method(make_field, "void", "int a", "double b", "int c", "int d", "double e")
    assert call_gen.parameter_list(field).render() == "p1 int32, p2 float64, p3, p4 int32, p5 float64"


def test_receiver_of_another_type_is_numbered(make_field, call_gen) -> None:
    field = make_field("notify", "void (*)(struct _cef_browser_t *browser, int code)")
    assert call_gen.parameter_list(field).render() == "p1 *Browser, p2 int32"


def test_data_member_has_no_parameter_list(make_field, call_gen) -> None:
    assert call_gen.parameter_list(make_field("bar", "int")).render() == ""


def test_void_call_is_a_bare_statement(make_field, call_gen) -> None:
    field = make_field("set_rect", "void (*)(struct _cef_foo_t *self, int x, int y, int z)")
    body = call_gen.call_function_pointer(field)
    assert isinstance(body.statements[-1], ExprStmt)
    assert body.render() == "C.gocef_foo_set_rect(d.toNative(), C.int(p1), C.int(p2), C.int(p3), d.set_rect)"


def test_string_pointer_param(make_field, call_gen) -> None:
    field = make_field("load_url", f"void (*)({RECEIVER}, const cef_string_t *url)")
    assert call_gen.parameter_list(field).render() == "p1 *string"
    assert call_gen.call_function_pointer(field).render() == (
        "var s1 C.cef_string_t\n"
        "setCEFStr(*p1, &s1)\n"
        "C.gocef_foo_load_url(d.toNative(), &s1, d.load_url)"
    )


def test_string_value_param_is_passed_by_address(make_field, call_gen) -> None:
    field = _method(make_field, "void", "cef_string_t name")
    assert call_gen.call_function_pointer(field).render() == (
        "var s1 C.cef_string_t\n"
        "setCEFStr(p1, &s1)\n"
        "C.gocef_foo_method(d.toNative(), &s1, d.method)"
    )


def test_value_struct_double_pointer(make_field, call_gen) -> None:
    field = _method(make_field, "void", "cef_rect_t **rect")
    assert field.go_params[1] == "**Rect"
    assert call_gen.call_function_pointer(field).render() == (
        "pd1 := (*p1).toNative(&C.cef_rect_t{})\n"
        "C.gocef_foo_method(d.toNative(), &pd1, d.method)"
    )


def test_class_struct_double_pointer(make_field, call_gen) -> None:
    field = _method(make_field, "void", "struct _cef_browser_t **browser")
    assert call_gen.call_function_pointer(field).render() == (
        "pd1 := (*p1).toNative()\n"
        "C.gocef_foo_method(d.toNative(), &pd1, d.method)"
    )


def test_string_array_param(make_field, call_gen) -> None:
    field = _method(make_field, "void", "size_t argc", "char **argv")
    assert call_gen.call_function_pointer(field).render() == (
        "cp2 := C.calloc(C.size_t(len(p2)), C.size_t(unsafe.Sizeof(uintptr(0))))\n"
        "tp2 := (*[1<<30 - 1]*C.char)(cp2)\n"
        "for i, one := range p2 {\n"
        "\ttp2[i] = C.CString(one)\n"
        "}\n"
        "C.gocef_foo_method(d.toNative(), C.size_t(p1), (**C.char)(cp2), d.method)"
    )


def test_enum_pointer_param(make_field, call_gen) -> None:
    field = _method(make_field, "void", "cef_errorcode_t *error")
    assert call_gen.call_function_pointer(field).render() == (
        "e1 := C.cef_errorcode_t(*p1)\n"
        "C.gocef_foo_method(d.toNative(), &e1, d.method)"
    )


def test_enum_value_param_is_cast(make_field, call_gen) -> None:
    field = _method(make_field, "void", "cef_log_severity_t level")
    assert call_gen.call_function_pointer(field).render() == (
        "C.gocef_foo_method(d.toNative(), C.cef_log_severity_t(p1), d.method)"
    )


@pytest.mark.parametrize("c_type", ["void *data", "void **data", "const void *data"])
def test_opaque_pointer_passthrough(make_field, call_gen, c_type: str) -> None:
    field = _method(make_field, "void", c_type)
    assert call_gen.call_function_pointer(field).render() == "C.gocef_foo_method(d.toNative(), p1, d.method)"


def test_value_struct_pointer_param(make_field, call_gen) -> None:
    field = _method(make_field, "void", "const cef_rect_t *rect")
    assert call_gen.call_function_pointer(field).render() == (
        "C.gocef_foo_method(d.toNative(), p1.toNative(&C.cef_rect_t{}), d.method)"
    )


def test_class_struct_pointer_param(make_field, call_gen) -> None:
    field = _method(make_field, "void", "struct _cef_browser_t *browser")
    assert call_gen.call_function_pointer(field).render() == (
        "C.gocef_foo_method(d.toNative(), p1.toNative(), d.method)"
    )


def test_other_pointer_and_value_params(make_field, call_gen) -> None:
    field = _method(make_field, "void", "int *count", "double zoom", "float **matrix")
    assert call_gen.call_function_pointer(field).render() == (
        "C.gocef_foo_method(d.toNative(), (*C.int)(p1), C.double(p2), (**C.float)(p3), d.method)"
    )


def test_value_struct_return(make_field, call_gen) -> None:
    field = make_field("get_bounds", f"cef_rect_t (*)({RECEIVER})")
    assert call_gen.call_function_pointer(field).render() == (
        "native := C.gocef_foo_get_bounds(d.toNative(), d.get_bounds)\n"
        "var result Rect\n"
        "result.fromNative(&native)\n"
        "return result"
    )


def test_string_value_return(make_field, call_gen) -> None:
    field = make_field("get_name", f"cef_string_t (*)({RECEIVER})")
    assert call_gen.call_function_pointer(field).render() == (
        "native := C.gocef_foo_get_name(d.toNative(), d.get_name)\n"
        "return cefstrToString(&native)"
    )


def test_string_pointer_return(make_field, call_gen) -> None:
    field = make_field("get_name", f"cef_string_t *(*)({RECEIVER})")
    assert call_gen.call_function_pointer(field).render() == (
        "return cefstrToString(C.gocef_foo_get_name(d.toNative(), d.get_name))"
    )


def test_userfree_string_return(make_field, call_gen) -> None:
    field = make_field("get_url", f"cef_string_userfree_t (*)({RECEIVER})")
    assert field.go_return_type == "string"
    assert call_gen.call_function_pointer(field).render() == (
        "return cefuserfreestrToString(C.gocef_foo_get_url(d.toNative(), d.get_url))"
    )


def test_pointer_return_is_parenthesized(make_field, call_gen) -> None:
    field = make_field("get_browser", f"struct _cef_browser_t *(*)({RECEIVER})")
    assert field.go_return_type == "*Browser"
    assert call_gen.call_function_pointer(field).render() == (
        "return (*Browser)(C.gocef_foo_get_browser(d.toNative(), d.get_browser))"
    )


def test_custom_native_package(registry, make_field) -> None:
    gen = CallGenerator(registry, GenConfig(native_package="capi"))
    field = _method(make_field, "int", "double zoom")
    assert gen.call_function_pointer(field).render() == (
        "return int32(capi.gocef_foo_method(d.toNative(), capi.double(p1), d.method))"
    )


@pytest.mark.parametrize("type_info", ["void (*)(void)", "void (*)()"])
def test_parameterless_call_matches_trampoline(make_field, call_gen, trampoline_gen, type_info: str) -> None:
    field = make_field("shutdown", type_info)
    assert call_gen.parameter_list(field).render() == ""
    assert call_gen.call_function_pointer(field).render() == "C.gocef_foo_shutdown(d.shutdown)"
    assert trampoline_gen.generate(field) == (
        "void gocef_foo_shutdown(void (CEF_CALLBACK *callback)(void)) { callback(); }"
    )


def test_const_value_struct_return(make_field, call_gen) -> None:
    field = make_field("get_bounds", f"const cef_rect_t (*)({RECEIVER})")
    assert field.go_return_type == "Rect"
    assert call_gen.call_function_pointer(field).render() == (
        "native := C.gocef_foo_get_bounds(d.toNative(), d.get_bounds)\n"
        "var result Rect\n"
        "result.fromNative(&native)\n"
        "return result"
    )
